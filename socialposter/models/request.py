from typing import Literal, Optional

from pydantic import BaseModel, Field, HttpUrl

from socialposter.models.page import PageSummary

RenderMode = Literal["auto", "http", "browser"]


class GenerationSettings(BaseModel):
    """Per-request remote-model settings; omitted values come from the environment."""

    api_key: Optional[str] = Field(
        default=None,
        description="Bearer token for the remote model. Without one only templates are used.",
    )
    provider: Optional[str] = Field(
        default=None,
        description="Remote provider: 'huggingface' or 'openai'.",
        examples=["huggingface"],
    )
    model: Optional[str] = Field(
        default=None,
        description="Model identifier overriding the per-platform model selection.",
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        le=120,
        description="Seconds to wait for the remote model before falling back to templates.",
    )


class ExtractRequest(BaseModel):
    url: HttpUrl
    render_mode: RenderMode = "auto"
    """How the target URL is fetched.

    ``"auto"`` (default)
        Plain HTTP first; headless-browser rendering when the page looks like
        a JavaScript shell with almost no readable text.

    ``"http"``
        Always use the lightweight HTTP fetcher.

    ``"browser"``
        Always render with a headless Chromium browser.
    """


class GenerateRequest(BaseModel):
    summary: PageSummary
    # Free strings: unknown values select the documented fallbacks instead of a 422
    platform: str = Field(default="linkedin", examples=["linkedin", "twitter"])
    style: str = Field(default="professional", examples=["professional", "modern", "minimal"])
    settings: Optional[GenerationSettings] = None
    seed: Optional[int] = Field(
        default=None,
        description="Seed for hook selection; the same seed reproduces the same template draft.",
    )


class DraftRequest(ExtractRequest):
    platform: str = Field(default="linkedin", examples=["linkedin", "twitter"])
    style: str = Field(default="professional", examples=["professional", "modern", "minimal"])
    settings: Optional[GenerationSettings] = None
    seed: Optional[int] = None
