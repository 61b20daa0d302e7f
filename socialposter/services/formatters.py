"""Platform- and style-specific post layouts."""

import random
from typing import Callable, Dict, List, NamedTuple, Optional

TWEET_LIMIT = 280
ELLIPSIS = "…"

STYLES = ("professional", "modern", "minimal")
DEFAULT_STYLE = "professional"


class Fragments(NamedTuple):
    hook: str
    points: List[str]
    hashtags: List[str]
    cta: str
    url: str
    description: str


class FormattedPost(NamedTuple):
    content: str
    segments: Optional[List[str]] = None


def _blocks(*parts: str) -> str:
    """Join the non-empty *parts* with blank lines."""
    return "\n\n".join(part for part in parts if part)


def _tags(hashtags: List[str], limit: Optional[int] = None) -> str:
    return " ".join(hashtags[:limit] if limit is not None else hashtags)


def truncate_text(text: str, limit: int) -> str:
    """Cut *text* to at most *limit* characters at a word boundary, marking the cut."""
    if len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]
    cut = text[: limit - len(ELLIPSIS)]
    boundary = cut.rfind(" ")
    if boundary > len(cut) // 2:
        cut = cut[:boundary]
    return cut.rstrip() + ELLIPSIS


def fit_segment(prefix: str, body: str, suffix: str = "", limit: int = TWEET_LIMIT) -> str:
    """Assemble one thread segment, shortening only *body* to respect *limit*."""
    room = limit - len(prefix) - len(suffix)
    if room <= 0:
        return truncate_text(prefix + body + suffix, limit)
    return prefix + truncate_text(body, room) + suffix


def _closing_segment(prefix: str, body: str, url: str, hashtags: List[str]) -> str:
    # Hashtags are dropped from the end before the text itself is shortened
    tags = list(hashtags)
    while True:
        tail = _blocks(url, _tags(tags))
        suffix = f"\n\n{tail}" if body and tail else tail
        if not tags or len(prefix) + len(body) + len(suffix) <= TWEET_LIMIT:
            return fit_segment(prefix, body, suffix)
        tags.pop()


# ---------------------------------------------------------------------------
# LinkedIn
# ---------------------------------------------------------------------------

def format_linkedin(f: Fragments, style: str, rng: random.Random) -> FormattedPost:
    if style == "modern":
        surprise = ""
        if f.points:
            surprise = f"The biggest surprise?\n\nNumber {rng.randint(1, len(f.points))}."
        return FormattedPost(_blocks(
            f.hook,
            "Here's what I learned:",
            "\n\n".join(f.points),
            surprise,
            f.cta,
            _tags(f.hashtags),
            f"🔗 {f.url}" if f.url else "",
        ))
    if style == "minimal":
        return FormattedPost(_blocks(f.hook, "\n".join(f.points[:3]), f.url, _tags(f.hashtags)))
    return FormattedPost(_blocks(
        f.hook,
        "\n\n".join(f.points),
        f.cta,
        _tags(f.hashtags),
        f"Full article → {f.url}" if f.url else "",
    ))


# ---------------------------------------------------------------------------
# Twitter / X threads
# ---------------------------------------------------------------------------

def format_twitter(f: Fragments, style: str, rng: random.Random) -> FormattedPost:
    last = len(f.points) + 2

    if style == "modern":
        segments = [fit_segment("", f.hook, "\n\nLet me explain 👇\n\n1/")]
        segments += [
            fit_segment(f"{i + 2}/ ", point, "\n\n(this is important)")
            for i, point in enumerate(f.points)
        ]
        segments.append(
            _closing_segment(f"{last}/ ", f"If you found this valuable:\n\n{f.cta}", f.url, f.hashtags)
        )
    elif style == "minimal":
        segments = [fit_segment("", f.hook, "\n\n1/")]
        segments += [fit_segment(f"{i + 2}/ ", point) for i, point in enumerate(f.points)]
        segments.append(_closing_segment(f"{last}/ ", "", f.url, f.hashtags))
    else:
        segments = [fit_segment("", f.hook, "\n\nA thread 🧵\n\n1/")]
        segments += [fit_segment(f"{i + 2}/ ", point) for i, point in enumerate(f.points)]
        segments.append(_closing_segment(f"{last}/ ", f.cta, f.url, f.hashtags))

    return FormattedPost("\n\n".join(segments), segments)


# ---------------------------------------------------------------------------
# Instagram
# ---------------------------------------------------------------------------

def format_instagram(f: Fragments, style: str, rng: random.Random) -> FormattedPost:
    if style == "modern":
        sparkled = [f"✨ {p[2:] if p.startswith('• ') else p}" for p in f.points]
        tags = _tags(f.hashtags)
        return FormattedPost(_blocks(
            f"{f.hook} 🔥", "\n\n".join(sparkled), f.cta, f"-\n{tags}" if tags else ""
        ))
    if style == "minimal":
        return FormattedPost(_blocks(f.hook, "\n".join(f.points[:3]), _tags(f.hashtags, 10)))
    tags = _tags(f.hashtags)
    return FormattedPost(_blocks(
        f.hook,
        "\n\n".join(f"{p} ✓" for p in f.points),
        f.cta,
        f"•\n•\n•\n\n{tags}" if tags else "",
    ))


# ---------------------------------------------------------------------------
# Facebook
# ---------------------------------------------------------------------------

def format_facebook(f: Fragments, style: str, rng: random.Random) -> FormattedPost:
    if style == "modern":
        return FormattedPost(_blocks(
            f.hook,
            "Here's the deal 👇",
            "\n\n".join(f"💡 {p}" for p in f.points),
            f.cta,
            f"Full story → {f.url}" if f.url else "",
        ))
    if style == "minimal":
        lead = f.points[0] if f.points else f.description
        return FormattedPost(_blocks(f.hook, lead, f.url))
    return FormattedPost(_blocks(
        f.hook,
        f.description,
        "Key takeaways:\n" + "\n".join(f.points) if f.points else "",
        f.cta,
        f"Read more: {f.url}" if f.url else "",
    ))


def format_generic(f: Fragments) -> FormattedPost:
    """Layout for platforms without a dedicated formatter."""
    return FormattedPost(_blocks(f.hook, "\n".join(f.points), f.cta))


FORMATTERS: Dict[str, Callable[[Fragments, str, random.Random], FormattedPost]] = {
    "linkedin": format_linkedin,
    "twitter": format_twitter,
    "instagram": format_instagram,
    "facebook": format_facebook,
}


def effective_style(style: str) -> str:
    style = (style or "").strip().lower()
    return style if style in STYLES else DEFAULT_STYLE


def format_post(platform: str, style: str, fragments: Fragments, rng: random.Random) -> FormattedPost:
    formatter = FORMATTERS.get(platform)
    if formatter is None:
        return format_generic(fragments)
    return formatter(fragments, effective_style(style), rng)
