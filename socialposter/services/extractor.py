"""Best-effort extraction of a bounded :class:`PageSummary` from arbitrary HTML.

Every field is produced by its own heuristic chain.  A heuristic that raises
only costs its own field, which falls back to a safe default; the single
fatal condition is an unreadable document (:class:`ExtractionError`).
"""

import logging
import re
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from bs4 import Tag

from socialposter.models.page import (
    MAX_BRAND_COLORS,
    MAX_CONTENT_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_IMAGES,
    MAX_KEY_POINTS,
    UNTITLED_PAGE,
    ImageInfo,
    PageSummary,
)
from socialposter.services.document import ExtractionError, HtmlDocument
from socialposter.services.normalizer import (
    collapse_whitespace,
    is_transparent,
    normalize_image_url,
    rgb_to_hex,
)
from socialposter.services.sanitizer import strip_markup

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MIN_IMAGE_SIDE = 100

_HERO_IMAGE_SELECTOR = ", ".join(
    f"img[{attr}*='{hint}']"
    for hint in ("hero", "featured", "banner")
    for attr in ("class", "id")
)

_LOGO_SELECTORS = (
    "img[alt*='logo' i]",
    "img[class*='logo' i]",
    "img[id*='logo' i]",
    ".logo img",
    "#logo img",
    "header img:first-of-type",
    ".navbar img:first-of-type",
)

_CONTENT_SELECTORS = (
    "article",
    ".content",
    ".post-content",
    ".entry-content",
    "main",
    ".main-content",
)

# (selector, min length inclusive, max length exclusive, how many to keep)
_KEY_POINT_SOURCES = (
    ("h2, h3", 10, 100, 5),
    ("li", 20, 150, 3),
    ("strong, b", 10, 100, 3),
)

_MIN_FALLBACK_PARAGRAPH = 50
_MAX_FALLBACK_PARAGRAPHS = 5

_DECLARATION_RE = re.compile(r"([-\w]+)\s*:\s*([^;]+)")
_ROOT_RULE_RE = re.compile(r":root\s*\{([^}]*)\}", re.IGNORECASE)
_BODY_RULE_RE = re.compile(r"(?:^|[},\s])body\s*\{([^}]*)\}", re.IGNORECASE)
_PX_RE = re.compile(r"^\s*(\d+)(?:\.\d+)?\s*(?:px)?\s*$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Heuristic plumbing
# ---------------------------------------------------------------------------

def _first_of(candidates: Iterable[Callable[[], Optional[T]]]) -> Optional[T]:
    """Evaluate *candidates* in order and return the first non-empty result."""
    for candidate in candidates:
        value = candidate()
        if value:
            return value
    return None


def _field(name: str, compute: Callable[[], T], default: T) -> T:
    """Run one field heuristic; any failure degrades to *default*."""
    try:
        return compute()
    except Exception as exc:
        logger.debug("Field '%s' fell back to its default: %s", name, exc)
        return default


def _truncate(text: str, limit: int) -> str:
    return text[:limit].rstrip()


def _dimension(img: Tag, attr: str) -> int:
    """Return the pixel size declared on *img* via attribute or inline style."""
    raw = img.get(attr)
    if raw is None:
        for prop, value in _DECLARATION_RE.findall(img.get("style") or ""):
            if prop.lower() == attr:
                raw = value
                break
    if raw is None:
        return 0
    match = _PX_RE.match(str(raw))
    return int(match.group(1)) if match else 0


def _image_src(img: Tag) -> Optional[str]:
    return img.get("src") or img.get("data-src")


def _image_info(img: Tag, doc: HtmlDocument) -> Optional[ImageInfo]:
    src = normalize_image_url(_image_src(img), doc.location)
    if not src:
        return None
    return ImageInfo(
        src=src,
        alt=collapse_whitespace(img.get("alt")),
        width=_dimension(img, "width"),
        height=_dimension(img, "height"),
    )


def _meta_text(doc: HtmlDocument, **attrs: str) -> str:
    return collapse_whitespace(strip_markup(doc.meta_content(**attrs)))


# ---------------------------------------------------------------------------
# Field extractors
# ---------------------------------------------------------------------------

def extract_title(doc: HtmlDocument) -> str:
    return _first_of((
        lambda: doc.text_of(doc.select_one("h1")),
        doc.title_text,
        lambda: _meta_text(doc, property="og:title"),
    )) or UNTITLED_PAGE


def extract_description(doc: HtmlDocument) -> str:
    description = _first_of((
        lambda: _meta_text(doc, name="description"),
        lambda: _meta_text(doc, property="og:description"),
        lambda: doc.text_of(doc.select_one("p")),
    )) or ""
    return _truncate(description, MAX_DESCRIPTION_LENGTH)


def extract_main_image(doc: HtmlDocument) -> Optional[str]:
    def from_tag(selector: str) -> Optional[str]:
        img = doc.select_one(selector)
        return _image_src(img) if img else None

    src = _first_of((
        lambda: doc.meta_content(property="og:image"),
        lambda: from_tag(_HERO_IMAGE_SELECTOR),
        lambda: from_tag("img"),
    ))
    return normalize_image_url(src, doc.location)


def extract_images(doc: HtmlDocument) -> List[ImageInfo]:
    images: List[ImageInfo] = []
    for img in doc.select("img"):
        info = _image_info(img, doc)
        if info and info.width > _MIN_IMAGE_SIDE and info.height > _MIN_IMAGE_SIDE:
            images.append(info)
            if len(images) >= MAX_IMAGES:
                break
    return images


def extract_key_points(doc: HtmlDocument) -> List[str]:
    points: List[str] = []
    for selector, min_len, max_len, limit in _KEY_POINT_SOURCES:
        texts = (doc.text_of(node) for node in doc.select(selector))
        points.extend([t for t in texts if min_len <= len(t) < max_len][:limit])
    # dict preserves first-occurrence order
    return list(dict.fromkeys(points))[:MAX_KEY_POINTS]


def _body_background(doc: HtmlDocument) -> Optional[str]:
    declarations: List[tuple] = []
    if doc.body is not None:
        declarations.extend(_DECLARATION_RE.findall(doc.body.get("style") or ""))
    if not declarations:
        for sheet in doc.stylesheets:
            for block in _BODY_RULE_RE.findall(sheet):
                declarations.extend(_DECLARATION_RE.findall(block))

    for prop, value in reversed(declarations):
        if prop.lower() in ("background-color", "background"):
            value = value.strip()
            if is_transparent(value):
                return None
            return rgb_to_hex(value)
    return None


def _inline_colors(doc: HtmlDocument) -> List[str]:
    colors: List[str] = []
    for node in doc.select("[style*='color'], [style*='background']"):
        for prop, value in _DECLARATION_RE.findall(node.get("style") or ""):
            if prop.lower() in ("color", "background-color", "background"):
                hex_value = rgb_to_hex(value)
                if hex_value:
                    colors.append(hex_value)
    return colors


def _root_custom_property_colors(doc: HtmlDocument) -> List[str]:
    colors: List[str] = []
    for sheet in doc.stylesheets:
        for block in _ROOT_RULE_RE.findall(sheet):
            for prop, value in _DECLARATION_RE.findall(block):
                if prop.startswith("--") and "color" in prop.lower():
                    hex_value = rgb_to_hex(value)
                    if hex_value:
                        colors.append(hex_value)
    return colors


def extract_brand_colors(doc: HtmlDocument) -> List[str]:
    # Each source is guarded separately so one bad stylesheet keeps the others
    candidates: List[Optional[str]] = []
    candidates.append(_field("brand_colors.body", lambda: _body_background(doc), None))
    candidates.extend(_field("brand_colors.inline", lambda: _inline_colors(doc), []))
    candidates.extend(_field("brand_colors.root", lambda: _root_custom_property_colors(doc), []))

    colors = [c for c in dict.fromkeys(candidates) if c and c != "#000000"]
    return colors[:MAX_BRAND_COLORS]


def extract_logo(doc: HtmlDocument) -> Optional[ImageInfo]:
    for selector in _LOGO_SELECTORS:
        img = doc.select_one(selector)
        if img is not None:
            info = _image_info(img, doc)
            if info:
                return info
    return None


def extract_metadata(doc: HtmlDocument) -> Dict[str, str]:
    metadata: Dict[str, str] = {}
    for attrs in doc.meta_tags():
        content = attrs.get("content", "")
        for key in ("name", "property"):
            if attrs.get(key):
                metadata[attrs[key]] = content
    return metadata


def extract_main_content(doc: HtmlDocument) -> str:
    def from_container(selector: str) -> str:
        return doc.text_of(doc.select_one(selector), block=True)

    content = _first_of(
        (lambda sel=selector: from_container(sel)) for selector in _CONTENT_SELECTORS
    )
    if content:
        return _truncate(content, MAX_CONTENT_LENGTH)

    paragraphs = [doc.text_of(p) for p in doc.select("p")]
    long_ones = [p for p in paragraphs if len(p) > _MIN_FALLBACK_PARAGRAPH]
    return _truncate(" ".join(long_ones[:_MAX_FALLBACK_PARAGRAPHS]), MAX_CONTENT_LENGTH)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract(doc: HtmlDocument) -> PageSummary:
    """Build a :class:`PageSummary` from *doc*, one independent field at a time."""
    return PageSummary(
        url=doc.location,
        title=_field("title", lambda: extract_title(doc), UNTITLED_PAGE),
        description=_field("description", lambda: extract_description(doc), ""),
        main_image=_field("main_image", lambda: extract_main_image(doc), None),
        images=_field("images", lambda: extract_images(doc), []),
        key_points=_field("key_points", lambda: extract_key_points(doc), []),
        brand_colors=_field("brand_colors", lambda: extract_brand_colors(doc), []),
        logo=_field("logo", lambda: extract_logo(doc), None),
        metadata=_field("metadata", lambda: extract_metadata(doc), {}),
        content=_field("content", lambda: extract_main_content(doc), ""),
    )


def extract_html(html: str, url: str) -> PageSummary:
    """Parse *html* located at *url* and extract its summary.

    Raises:
        ExtractionError: if the document cannot be read at all.
    """
    doc = HtmlDocument(html, url)
    summary = extract(doc)
    logger.info(
        "Extracted page summary",
        extra={
            "url": url,
            "key_points": len(summary.key_points),
            "images": len(summary.images),
            "brand_colors": len(summary.brand_colors),
        },
    )
    return summary


__all__ = ["ExtractionError", "HtmlDocument", "extract", "extract_html"]
