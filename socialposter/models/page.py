from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_DESCRIPTION_LENGTH = 200
MAX_CONTENT_LENGTH = 1000
MAX_IMAGES = 10
MAX_KEY_POINTS = 8
MAX_BRAND_COLORS = 5
UNTITLED_PAGE = "Untitled Page"


class ImageInfo(BaseModel):
    """An image as found in the document (dimensions are never guessed)."""

    model_config = ConfigDict(frozen=True)

    src: str
    alt: str = ""
    width: int = 0
    height: int = 0


class PageSummary(BaseModel):
    """Bounded, plain-text summary of one webpage, produced per extraction."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str = Field(default=UNTITLED_PAGE, min_length=1)
    description: str = Field(default="", max_length=MAX_DESCRIPTION_LENGTH)
    main_image: Optional[str] = None
    images: List[ImageInfo] = Field(default_factory=list, max_length=MAX_IMAGES)
    key_points: List[str] = Field(default_factory=list, max_length=MAX_KEY_POINTS)
    brand_colors: List[str] = Field(default_factory=list, max_length=MAX_BRAND_COLORS)
    logo: Optional[ImageInfo] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    content: str = Field(default="", max_length=MAX_CONTENT_LENGTH)
