"""Fragment builders: hook, key points, hashtags and call-to-action."""

import random
from typing import Dict, List

from socialposter.services.catalog import Catalog
from socialposter.services.classifier import (
    extract_action,
    extract_contrarian,
    extract_key_point,
    extract_number,
    extract_result,
    extract_topic,
)


class _HookFields(dict):
    # Unknown placeholders in a replaced catalog render as empty text
    def __missing__(self, key: str) -> str:
        return ""


def hook_fields(title: str) -> Dict[str, str]:
    """Return the template fields a hook can draw from *title*."""
    return _HookFields(
        title=title,
        topic=extract_topic(title),
        action=extract_action(title),
        number=extract_number(title),
        result=extract_result(title),
        key_point=extract_key_point(title),
        contrarian=extract_contrarian(title),
    )


def hook_candidates(title: str, content_type: str, catalog: Catalog) -> List[str]:
    """Return every hook the pool for *content_type* can produce for *title*."""
    fields = hook_fields(title)
    return [template.format_map(fields).strip() for template in catalog.hook_pool(content_type)]


def build_hook(title: str, content_type: str, rng: random.Random, catalog: Catalog) -> str:
    candidates = [c for c in hook_candidates(title, content_type, catalog) if c]
    return rng.choice(candidates) if candidates else title


def format_key_points(points: List[str], platform: str, catalog: Catalog) -> List[str]:
    """Cap *points* for *platform* and apply its list style."""
    selected = points[: catalog.key_point_cap(platform)]
    palette = catalog.emoji_palette or ["•"]

    formatted = []
    for index, point in enumerate(selected):
        if platform in ("linkedin", "facebook"):
            formatted.append(f"{index + 1}. {point}")
        elif platform == "twitter":
            formatted.append(f"{palette[index % len(palette)]} {point}")
        else:
            formatted.append(f"• {point}")
    return formatted


def build_hashtags(title: str, description: str, platform: str, catalog: Catalog) -> List[str]:
    """Return an ordered, de-duplicated hashtag list for *platform*."""
    content = f"{title} {description}".lower()
    # dict keys act as an insertion-ordered set
    tags: Dict[str, None] = {}

    for term, term_tags in catalog.topic_hashtags.items():
        if term in content:
            tags.update(dict.fromkeys(term_tags))

    platform_tags = catalog.platform_hashtags.get(platform, [])
    for tag in platform_tags[: catalog.platform_hashtag_count]:
        if len(tags) < catalog.platform_hashtag_ceiling:
            tags[tag] = None

    for tag in catalog.trending_hashtags:
        if len(tags) < catalog.trending_hashtag_ceiling:
            tags[tag] = None

    return list(tags)[: catalog.hashtag_limit(platform)]


def build_cta(platform: str, content_type: str, catalog: Catalog) -> str:
    platform_ctas = catalog.ctas.get(platform, {})
    return platform_ctas.get(content_type) or platform_ctas.get("general") or catalog.generic_cta
