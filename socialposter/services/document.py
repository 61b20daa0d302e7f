"""Read-only view over a parsed HTML document.

The extractor only ever talks to :class:`HtmlDocument`, never to
BeautifulSoup directly, so it can be exercised against synthetic HTML
fixtures without a browser engine.
"""

from typing import Dict, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from socialposter.services.normalizer import collapse_whitespace, origin_of
from socialposter.services.sanitizer import strip_non_content


class ExtractionError(Exception):
    """The document could not be read at all; no summary can be produced."""


class HtmlDocument:
    def __init__(self, html: str, location: str):
        if not isinstance(html, str):
            raise ExtractionError(f"Expected HTML text, got {type(html).__name__}.")
        parsed = urlparse(location or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ExtractionError(f"Document location '{location}' is not an absolute http(s) URL.")

        try:
            self._soup = BeautifulSoup(html, "lxml")
        except Exception as exc:
            raise ExtractionError(f"Unable to parse document: {exc}") from exc

        # Styles are read before the tree is stripped down to readable content
        self.stylesheets: List[str] = strip_non_content(self._soup)
        self.location = location
        self.origin = origin_of(location)

    @property
    def body(self) -> Optional[Tag]:
        return self._soup.body

    def select(self, selector: str) -> List[Tag]:
        return self._soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self._soup.select_one(selector)

    def meta_content(self, name: Optional[str] = None, property: Optional[str] = None) -> str:
        """Return the stripped ``content`` of the first matching meta tag, or ``""``."""
        attrs = {"name": name} if name else {"property": property}
        meta = self._soup.find("meta", attrs=attrs)
        if meta and meta.get("content"):
            return str(meta["content"]).strip()
        return ""

    def meta_tags(self) -> List[Dict[str, str]]:
        return [dict((k, str(v)) for k, v in tag.attrs.items()) for tag in self._soup.find_all("meta")]

    def title_text(self) -> str:
        title_tag = self._soup.find("title")
        return self.text_of(title_tag) if title_tag else ""

    @staticmethod
    def text_of(node: Optional[Tag], block: bool = False) -> str:
        """Return the visible text of *node*.

        With ``block=True`` line structure is kept (like ``innerText``);
        otherwise whitespace is collapsed to a single line.
        """
        if node is None:
            return ""
        if block:
            lines = (collapse_whitespace(line) for line in node.get_text("\n").split("\n"))
            return "\n".join(line for line in lines if line)
        return collapse_whitespace(node.get_text(" "))
