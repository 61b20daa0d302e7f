import re
from typing import List
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment
from lxml.html import defs

# Subtrees dropped together with their contents when text is sanitized
_DANGEROUS_TAGS = ["script", "iframe", "style"]
# "<" that does not open a known HTML element is plain text (x<10, List<String>)
_ANGLE_RE = re.compile(r"<(?!!)(/?)([A-Za-z][\w:-]*)?")
_JS_SCHEME_RE = re.compile(r"javascript\s*:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"\bon\w+\s*=", re.IGNORECASE)
# Control characters except tab and newline
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_SPACES_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")

ALLOWED_URL_SCHEMES = {"http", "https"}
VALID_PLATFORMS = ("linkedin", "twitter", "instagram", "facebook")

# Tags whose subtree never contributes readable text
NON_CONTENT_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "object",
    "embed",
    "applet",
    # Vector / canvas graphics produce raw coordinate/path noise in plain text
    "svg",
    "canvas",
    # Template elements may contain raw JS template markup
    "template",
}


def strip_non_content(soup: BeautifulSoup) -> List[str]:
    """Remove non-content nodes from *soup* in place.

    The text of every ``<style>`` element is returned before removal so that
    callers can still inspect inline stylesheets.
    """
    stylesheets = [tag.get_text() for tag in soup.find_all("style")]

    for tag in soup.find_all(NON_CONTENT_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    return stylesheets


def _escape_stray_angles(text: str) -> str:
    def replace(match: re.Match) -> str:
        name = match.group(2)
        if name and name.lower() in defs.tags:
            return match.group(0)
        return "&lt;" + match.group(1) + (name or "")

    return _ANGLE_RE.sub(replace, text)


def strip_markup(text: str) -> str:
    """Return the readable text of *text*.

    HTML elements are parsed with BeautifulSoup; script, iframe and style
    subtrees are dropped and the remaining tags unwrapped.  Angle brackets
    that do not open a known HTML element are kept as text.
    """
    if not text:
        return ""
    soup = BeautifulSoup(_escape_stray_angles(text), "lxml")
    for tag in soup.find_all(_DANGEROUS_TAGS):
        tag.decompose()
    return soup.get_text()


def sanitize_text(text: str) -> str:
    """Make *text* safe to publish as a plain-text post.

    Markup, ``javascript:`` schemes, inline event handlers and control
    characters are removed.  Line breaks are preserved because post layouts
    depend on them; only runs of spaces and of more than one blank line are
    collapsed.
    """
    if not text:
        return ""
    cleaned = _CONTROL_RE.sub("", text.replace("\r\n", "\n").replace("\r", "\n"))
    cleaned = strip_markup(cleaned)
    cleaned = _JS_SCHEME_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    cleaned = "\n".join(_SPACES_RE.sub(" ", line).strip() for line in cleaned.split("\n"))
    cleaned = _BLANK_LINES_RE.sub("\n\n", cleaned)
    return cleaned.strip()


def sanitize_url(url: str) -> str:
    """Return *url* when it is a well-formed http(s) URL, otherwise ``""``."""
    if not url:
        return ""
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        return ""
    return url


def validate_platform(platform: str) -> bool:
    """Return True when *platform* names a supported target network."""
    if not platform:
        return False
    return platform.strip().lower() in VALID_PLATFORMS
