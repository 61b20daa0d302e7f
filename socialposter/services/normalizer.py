"""Normalisation utilities: image URLs, CSS colours and plain-text fields."""

import re
from typing import Optional
from urllib.parse import urljoin, urlparse

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([\d.]+%?)\s*)?\)$",
    re.IGNORECASE,
)
_HEX_RE = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` for *url*."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def normalize_image_url(url: Optional[str], location: str) -> Optional[str]:
    """Return *url* in absolute form, resolved against the page *location*.

    * URLs that already carry a scheme are returned unchanged.
    * Scheme-relative URLs (``//cdn.example.com/a.png``) are forced to https.
    * Root-relative URLs (``/a.png``) are prefixed with the page origin.
    * Anything else is resolved against *location*.

    Returns ``None`` for missing or blank input.
    """
    if not url or not url.strip():
        return None
    url = url.strip()
    if urlparse(url).scheme:
        return url
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return origin_of(location) + url
    return urljoin(location, url)


def rgb_to_hex(value: Optional[str]) -> Optional[str]:
    """Convert a CSS colour to lowercase ``#rrggbb``.

    Accepts ``rgb(r, g, b)``, ``rgba(r, g, b, a)`` and hex notation
    (``#abc`` is expanded).  Unrecognised formats return ``None``.
    """
    if not value:
        return None
    value = value.strip()
    if _HEX_RE.match(value):
        digits = value[1:].lower()
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return "#" + digits

    match = _RGB_RE.match(value)
    if not match:
        return None
    channels = (min(int(part), 255) for part in match.groups()[:3])
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def is_transparent(value: Optional[str]) -> bool:
    """Return True for ``transparent`` and fully transparent ``rgba(...)`` values."""
    if not value:
        return True
    value = value.strip().lower()
    if value == "transparent":
        return True
    match = _RGB_RE.match(value)
    if match and match.group(4) is not None:
        alpha = match.group(4)
        try:
            return float(alpha.rstrip("%")) == 0
        except ValueError:
            return False
    return False


def collapse_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace into single spaces and strip the ends."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()
