"""Tests for markup stripping and text/URL sanitization."""

import pytest
from bs4 import BeautifulSoup

from socialposter.services.sanitizer import (
    sanitize_text,
    sanitize_url,
    strip_markup,
    strip_non_content,
    validate_platform,
)


def _strip(html: str):
    soup = BeautifulSoup(html, "lxml")
    styles = strip_non_content(soup)
    return soup, styles


class TestStripNonContent:
    def test_removes_script_tags(self):
        soup, _ = _strip("<p>Hello</p><script>alert('xss')</script>")
        assert "alert" not in soup.get_text()
        assert "Hello" in soup.get_text()

    def test_removes_noscript_and_iframe(self):
        soup, _ = _strip("<p>Body</p><noscript>Enable JS</noscript><iframe src='x'></iframe>")
        assert "Enable JS" not in soup.get_text()
        assert soup.find("iframe") is None

    def test_removes_svg_and_template(self):
        soup, _ = _strip("<p>Text</p><svg><path d='M0 0'/></svg><template><b>tpl</b></template>")
        assert soup.find("svg") is None
        assert "tpl" not in soup.get_text()

    def test_removes_html_comments(self):
        soup, _ = _strip("<p>Visible</p><!-- hidden comment -->")
        assert "hidden comment" not in str(soup)

    def test_returns_stylesheet_text_before_removal(self):
        soup, styles = _strip(
            "<head><style>:root { --brand-color: #fff; }</style></head><body><p>x</p></body>"
        )
        assert styles == [":root { --brand-color: #fff; }"]
        assert soup.find("style") is None

    def test_keeps_inline_style_attributes(self):
        soup, _ = _strip('<div style="color: red">Styled</div>')
        assert soup.find("div").get("style") == "color: red"

    def test_normal_content_preserved(self):
        soup, styles = _strip("<h1>Title</h1><p>Paragraph <strong>bold</strong> text.</p>")
        assert "Title" in soup.get_text()
        assert "bold" in soup.get_text()
        assert styles == []


class TestStripMarkup:
    def test_removes_tags_and_script_bodies(self):
        assert strip_markup("<b>Hi</b><script>evil()</script> there") == "Hi there"

    def test_empty(self):
        assert strip_markup("") == ""

    def test_comparison_operators_are_text(self):
        assert strip_markup("Use x<10 and y>5 to filter rows") == "Use x<10 and y>5 to filter rows"

    def test_generic_type_is_text(self):
        assert strip_markup("Why List<String> beats arrays in Java") == "Why List<String> beats arrays in Java"

    def test_unclosed_script_is_dropped(self):
        assert strip_markup("Safe <script>evil()").strip() == "Safe"


class TestSanitizeText:
    def test_removes_tags(self):
        assert sanitize_text("<p>Hello <em>world</em></p>") == "Hello world"

    def test_removes_script_block_contents(self):
        assert sanitize_text("Safe<script>alert(1)</script> text") == "Safe text"

    def test_removes_iframe_and_style_blocks(self):
        text = sanitize_text("A<iframe src='x'>frame</iframe>B<style>p{}</style>C")
        assert text == "ABC"

    def test_removes_javascript_scheme(self):
        assert "javascript:" not in sanitize_text("click javascript:alert(1)").lower()

    def test_removes_event_handlers(self):
        assert "onclick=" not in sanitize_text('x onclick="steal()" y').lower()

    def test_removes_control_characters(self):
        assert sanitize_text("a\x00b\x07c") == "abc"

    def test_preserves_line_breaks(self):
        assert sanitize_text("line one\nline two") == "line one\nline two"

    def test_collapses_spaces_and_blank_lines(self):
        assert sanitize_text("a    b\n\n\n\n c") == "a b\n\nc"

    def test_empty(self):
        assert sanitize_text("") == ""
        assert sanitize_text(None) == ""

    def test_idempotent(self):
        once = sanitize_text("<b>Bold</b>   move\r\n\r\n\r\nonload=x")
        assert sanitize_text(once) == once

    def test_keeps_angle_brackets_that_are_not_markup(self):
        assert sanitize_text("Use x<10 and y>5 to filter rows") == "Use x<10 and y>5 to filter rows"
        assert sanitize_text("<p>Map<K, V> in <b>Java</b></p>") == "Map<K, V> in Java"


class TestSanitizeUrl:
    @pytest.mark.parametrize("url", ["https://example.com/a?b=1", "http://example.com"])
    def test_accepts_http_and_https(self, url):
        assert sanitize_url(url) == url

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "ftp://example.com/x", "data:text/html,hi", "/relative", "https://", ""],
    )
    def test_rejects_other_urls(self, url):
        assert sanitize_url(url) == ""

    def test_strips_whitespace(self):
        assert sanitize_url("  https://example.com  ") == "https://example.com"


class TestValidatePlatform:
    @pytest.mark.parametrize("platform", ["linkedin", "twitter", "instagram", "facebook", " LinkedIn "])
    def test_supported(self, platform):
        assert validate_platform(platform)

    @pytest.mark.parametrize("platform", ["myspace", "", None, "x"])
    def test_unsupported(self, platform):
        assert not validate_platform(platform)
