"""Turn a :class:`PageSummary` into a platform-ready :class:`PostDraft`.

Generation is a two-stage pipeline: an optional remote-model attempt that
returns a :class:`~socialposter.services.llm.RemoteResult`, then the
deterministic template pipeline whenever that attempt is skipped or fails.
Neither stage raises for any ``(summary, platform, style)`` combination.
"""

import logging
import random
import re
from typing import List, NamedTuple, Optional

from socialposter import config
from socialposter.models.page import UNTITLED_PAGE, PageSummary
from socialposter.models.request import GenerationSettings
from socialposter.models.response import PostDraft
from socialposter.services.catalog import Catalog, get_catalog
from socialposter.services.classifier import detect_content_type
from socialposter.services.composer import build_cta, build_hashtags, build_hook, format_key_points
from socialposter.services.formatters import (
    Fragments,
    effective_style,
    fit_segment,
    format_post,
)
from socialposter.services.llm import RemoteGenerator, RemoteResult
from socialposter.services.prompts import build_prompts
from socialposter.services.sanitizer import sanitize_text, sanitize_url, validate_platform

logger = logging.getLogger(__name__)

# Tags must start with a letter, so "#1" is not a hashtag
_HASHTAG_RE = re.compile(r"(?<![\w#])#[^\W\d_]\w*")
# Position markers the model may already have written ("1/", "2/5")
_POSITION_RE = re.compile(r"^\d+\s*/\s*\d*\s*")


class _CleanSummary(NamedTuple):
    title: str
    description: str
    key_points: List[str]
    url: str


def _clean(summary: PageSummary) -> _CleanSummary:
    """Sanitize every caller-editable field before it reaches a template."""
    points = [p for p in (sanitize_text(p) for p in summary.key_points) if p]
    return _CleanSummary(
        title=sanitize_text(summary.title).replace("\n", " ") or UNTITLED_PAGE,
        description=sanitize_text(summary.description),
        key_points=points,
        url=sanitize_url(summary.url),
    )


def _normalize_platform(platform: str) -> str:
    return (platform or "").strip().lower()


def _draft(
    content: str,
    platform: str,
    style: str,
    content_type: str,
    source: str,
    hashtags: List[str],
    segments: Optional[List[str]] = None,
) -> PostDraft:
    return PostDraft(
        platform=platform,
        style=style,
        content_type=content_type,
        source=source,
        content=content,
        segments=segments,
        hashtags=hashtags,
        char_count=len(content),
        word_count=len(content.split()),
    )


def render_template(
    summary: PageSummary,
    platform: str,
    style: str = "professional",
    rng: Optional[random.Random] = None,
    catalog: Optional[Catalog] = None,
) -> PostDraft:
    """Render a post purely from templates.

    Unknown platforms get the generic hook/points/CTA layout without hashtags;
    unknown styles render as ``professional``.
    """
    rng = rng or random.Random()
    catalog = catalog or get_catalog()
    platform = _normalize_platform(platform)
    style = effective_style(style)
    clean = _clean(summary)

    content_type = detect_content_type(clean.title, clean.description)
    hook = build_hook(clean.title, content_type, rng, catalog)
    points = format_key_points(clean.key_points, platform, catalog)

    if validate_platform(platform):
        hashtags = build_hashtags(clean.title, clean.description, platform, catalog)
        cta = build_cta(platform, content_type, catalog)
    else:
        hashtags = []
        cta = catalog.generic_cta

    fragments = Fragments(
        hook=hook,
        points=points,
        hashtags=hashtags,
        cta=cta,
        url=clean.url,
        description=clean.description,
    )
    formatted = format_post(platform, style, fragments, rng)
    if platform == "instagram" and style == "minimal":
        hashtags = hashtags[:10]
    return _draft(
        formatted.content, platform, style, content_type, "template", hashtags, formatted.segments
    )


def _from_remote(
    result: RemoteResult, platform: str, style: str, content_type: str, catalog: Catalog
) -> Optional[PostDraft]:
    text = sanitize_text(result.text)
    if not text:
        return None
    hashtags = list(dict.fromkeys(_HASHTAG_RE.findall(text)))[: catalog.hashtag_limit(platform)]
    if platform == "twitter":
        parts = [_POSITION_RE.sub("", part.strip()) for part in text.split("\n\n") if part.strip()]
        segments = [fit_segment(f"{i}/ ", part) for i, part in enumerate(parts, start=1)]
        return _draft("\n\n".join(segments), platform, style, content_type, "ai", hashtags, segments)
    return _draft(text, platform, style, content_type, "ai", hashtags)


async def try_remote(
    summary: PageSummary,
    platform: str,
    style: str,
    settings: Optional[GenerationSettings] = None,
    remote: Optional[RemoteGenerator] = None,
    catalog: Optional[Catalog] = None,
) -> Optional[PostDraft]:
    """Ask the remote model for a post; ``None`` means "use the templates"."""
    platform = _normalize_platform(platform)
    style = effective_style(style)
    if not validate_platform(platform):
        return None

    if remote is None:
        settings = settings or GenerationSettings()
        api_key = settings.api_key or config.API_KEY
        if not api_key:
            return None
        remote = RemoteGenerator(
            api_key,
            provider=settings.provider or config.PROVIDER,
            model=settings.model or config.MODEL,
            timeout=settings.timeout,
        )

    content_type = detect_content_type(summary.title, summary.description)
    system, user = build_prompts(summary, platform, style, content_type)
    result = await remote.try_generate(system, user, platform)
    if not result.ok:
        logger.warning(
            "Remote generation failed, using templates",
            extra={"platform": platform, "model": result.model, "error": result.error},
        )
        return None

    draft = _from_remote(result, platform, style, content_type, catalog or get_catalog())
    if draft is None:
        logger.warning("Remote generation returned no usable text, using templates")
    return draft


async def generate(
    summary: PageSummary,
    platform: str,
    style: str = "professional",
    settings: Optional[GenerationSettings] = None,
    rng: Optional[random.Random] = None,
    catalog: Optional[Catalog] = None,
    remote: Optional[RemoteGenerator] = None,
) -> PostDraft:
    """Generate a draft, preferring the remote model when one is configured."""
    draft = await try_remote(
        summary, platform, style, settings=settings, remote=remote, catalog=catalog
    )
    if draft is not None:
        return draft
    return render_template(summary, platform, style, rng=rng, catalog=catalog)
