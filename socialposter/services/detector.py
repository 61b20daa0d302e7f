"""Detect pages whose readable content only appears after JavaScript runs.

Given the HTML returned by a plain HTTP GET and the word count of the text
the extractor could read from it, :func:`detect_rendering` decides whether
the page should be re-rendered in a headless browser before extraction.

Rendering types
---------------
``"spa"``
    JavaScript single-page application shell: framework fingerprints
    (React, Vue, Angular, Next.js, Nuxt, ...) **and** almost no readable
    text.

``"server"``
    The HTTP response already carries readable content.
"""

import re
from typing import Literal

RenderingType = Literal["spa", "server"]

# ---------------------------------------------------------------------------
# SPA framework fingerprints
# Present in the *un-rendered* HTML shell when a SPA mounts on the client.
# ---------------------------------------------------------------------------
_SPA_PATTERN = re.compile(
    # React / Next.js mount targets
    r'<div\s[^>]*\bid=["\']root["\']'
    r'|<div\s[^>]*\bid=["\']__next["\']'
    # Vue / generic SPA mount target
    r'|<div\s[^>]*\bid=["\']app["\']'
    # Nuxt.js
    r'|<div\s[^>]*\bid=["\']__nuxt["\']'
    r"|window\.__NUXT__"
    r"|__NEXT_DATA__"
    r"|ng-version="
    r"|data-reactroot",
    re.IGNORECASE,
)

# Below this many readable words a fingerprinted page is treated as a shell
SPA_MIN_WORDS = 20


def detect_rendering(html: str, word_count: int) -> RenderingType:
    """Classify how the readable content of *html* is produced."""
    if word_count < SPA_MIN_WORDS and _SPA_PATTERN.search(html):
        return "spa"
    return "server"
