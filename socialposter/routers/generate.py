import logging
import random

from fastapi import APIRouter, Request

from socialposter.models.request import DraftRequest, GenerateRequest
from socialposter.models.response import DraftResponse, PostDraft
from socialposter.routers.extract import limiter, summarize_url
from socialposter.services.generator import generate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=PostDraft,
    summary="Generate a social media draft from a page summary",
    description=(
        "Classifies the summary and renders a platform/style specific post. "
        "When a model API key is configured the remote model writes the post; "
        "any remote failure silently falls back to the template generator.\n\n"
        "Unknown platforms use a generic layout and unknown styles render as "
        "`professional`; neither is an error."
    ),
)
@limiter.limit("30/minute")
async def generate_post(request: Request, body: GenerateRequest) -> PostDraft:
    logger.info(
        "Generate request received",
        extra={"url": body.summary.url, "platform": body.platform, "style": body.style},
    )
    return await generate(
        body.summary,
        body.platform,
        body.style,
        settings=body.settings,
        rng=random.Random(body.seed),
    )


@router.post(
    "/draft",
    response_model=DraftResponse,
    summary="Extract a URL and generate a draft in one call",
)
@limiter.limit("10/minute")
async def draft_from_url(request: Request, body: DraftRequest) -> DraftResponse:
    url = str(body.url)
    logger.info(
        "Draft request received",
        extra={"url": url, "platform": body.platform, "style": body.style},
    )
    summary = await summarize_url(url, body.render_mode)
    draft = await generate(
        summary,
        body.platform,
        body.style,
        settings=body.settings,
        rng=random.Random(body.seed),
    )
    return DraftResponse(summary=summary, draft=draft)
