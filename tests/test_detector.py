"""Tests for script-rendered page detection."""

from socialposter.services.detector import SPA_MIN_WORDS, detect_rendering


def _spa_html(marker: str) -> str:
    return f"<!DOCTYPE html><html><head><title>App</title></head><body>{marker}</body></html>"


class TestDetectSPA:
    def test_react_root_with_thin_content(self):
        assert detect_rendering(_spa_html('<div id="root"></div>'), 0) == "spa"

    def test_next_mount_with_thin_content(self):
        assert detect_rendering(_spa_html('<div id="__next"></div>'), 5) == "spa"

    def test_vue_app_mount_with_thin_content(self):
        assert detect_rendering(_spa_html('<div id="app"></div>'), 0) == "spa"

    def test_nuxt_mount_with_thin_content(self):
        assert detect_rendering(_spa_html('<div id="__nuxt"></div>'), 3) == "spa"

    def test_next_data_script_with_thin_content(self):
        html = _spa_html('<script id="__NEXT_DATA__" type="application/json">{}</script>')
        assert detect_rendering(html, 0) == "spa"

    def test_angular_ng_version_with_thin_content(self):
        assert detect_rendering(_spa_html('<app-root ng-version="17.0.0"></app-root>'), 0) == "spa"

    def test_react_data_reactroot_with_thin_content(self):
        assert detect_rendering(_spa_html('<div data-reactroot=""></div>'), 10) == "spa"

    def test_marker_with_sufficient_content_is_server(self):
        """Server-rendered Next.js: marker present but the content already arrived."""
        html = _spa_html('<div id="__next"></div><script>__NEXT_DATA__={}</script>')
        assert detect_rendering(html, SPA_MIN_WORDS + 1) == "server"

    def test_marker_exactly_at_threshold_is_server(self):
        assert detect_rendering(_spa_html('<div id="root"></div>'), SPA_MIN_WORDS) == "server"


class TestDetectServer:
    def test_thin_content_without_markers_is_server(self):
        assert detect_rendering("<html><body><p>Hi</p></body></html>", 1) == "server"

    def test_empty_html_is_server(self):
        assert detect_rendering("<html></html>", 0) == "server"

    def test_large_static_page(self):
        html = "<html><body>" + "<p>content</p>" * 100 + "</body></html>"
        assert detect_rendering(html, 200) == "server"
