from typing import List, Literal, Optional

from pydantic import BaseModel

from socialposter.models.page import PageSummary


class PostDraft(BaseModel):
    platform: str
    style: str
    content_type: str
    source: Literal["ai", "template"]
    content: str
    """Display text. Twitter threads are their segments joined by a blank line."""

    segments: Optional[List[str]] = None
    """Thread segments in posting order (twitter only)."""

    hashtags: List[str] = []
    char_count: int = 0
    word_count: int = 0


class DraftResponse(BaseModel):
    summary: PageSummary
    draft: PostDraft
