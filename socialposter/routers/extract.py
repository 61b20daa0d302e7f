import logging

import httpx
from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from socialposter.models.page import PageSummary
from socialposter.models.request import ExtractRequest, RenderMode
from socialposter.services.browser_fetcher import fetch_url_with_browser
from socialposter.services.detector import detect_rendering
from socialposter.services.extractor import ExtractionError, extract_html
from socialposter.services.fetcher import fetch_url

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post("/extract", response_model=PageSummary, summary="Extract a page summary from a URL")
@limiter.limit("10/minute")
async def extract_page(request: Request, body: ExtractRequest) -> PageSummary:
    """Fetch *url* and return its bounded :class:`PageSummary`.

    The ``render_mode`` field controls how the page is fetched:

    * ``"auto"`` – Plain HTTP first; headless-browser fallback when the page
      is a JavaScript shell with almost no readable text.
    * ``"http"`` – Plain HTTP only.
    * ``"browser"`` – Always use a headless Chromium browser.
    """
    url = str(body.url)
    logger.info("Extract request received", extra={"url": url, "render_mode": body.render_mode})
    return await summarize_url(url, body.render_mode)


async def summarize_url(url: str, render_mode: RenderMode = "auto") -> PageSummary:
    """Fetch *url* according to *render_mode* and extract its summary.

    Errors are raised as :class:`HTTPException` so routers can return them as-is.
    """
    # ── Step 1: fetch HTML ────────────────────────────────────────────────────
    if render_mode == "browser":
        html, final_url = await _fetch_with_browser(url)
    else:
        html, final_url = await _fetch_with_http(url)

    # ── Step 2: extract ───────────────────────────────────────────────────────
    summary = _extract(html, final_url)

    # ── Step 3: SPA fallback (auto mode only) ─────────────────────────────────
    word_count = len(summary.content.split())
    if render_mode == "auto" and detect_rendering(html, word_count) == "spa":
        logger.info("Script-rendered page detected for %s – retrying with browser rendering", url)
        try:
            html, final_url = await _fetch_with_browser(url)
            summary = _extract(html, final_url)
        except HTTPException as exc:
            # Browser rendering failed; the thin HTTP summary is still valid
            logger.warning(
                "Browser rendering failed for %s (%s) – using HTTP result", url, exc.detail
            )

    return summary


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _extract(html: str, url: str) -> PageSummary:
    try:
        return extract_html(html, url)
    except ExtractionError as exc:
        logger.error("Extraction failed for %s: %s", url, exc)
        raise HTTPException(status_code=422, detail=f"Extraction failed: {exc}")


async def _fetch_with_http(url: str) -> tuple[str, str]:
    """Fetch *url* via plain HTTP and propagate errors as HTTP exceptions."""
    try:
        return await fetch_url(url)
    except ValueError as exc:
        logger.warning("Invalid or blocked URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except httpx.TimeoutException:
        logger.error("Timeout fetching URL: %s", url)
        raise HTTPException(status_code=504, detail="The target URL timed out.")
    except httpx.HTTPStatusError as exc:
        logger.error("HTTP error fetching URL %s: %s", url, exc)
        raise HTTPException(
            status_code=502, detail=f"Target URL returned HTTP {exc.response.status_code}."
        )
    except (httpx.RequestError, RuntimeError) as exc:
        logger.error("Error fetching URL %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))


async def _fetch_with_browser(url: str) -> tuple[str, str]:
    """Render *url* with a headless browser and return ``(html, final_url)``.

    Propagates errors as HTTP exceptions so the router can return a clean
    error response to the caller.
    """
    try:
        return await fetch_url_with_browser(url)
    except ValueError as exc:
        logger.warning("Invalid or blocked URL (browser): %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except RuntimeError as exc:
        logger.error("Browser rendering error for %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except Exception as exc:
        logger.error("Unexpected browser error for %s: %s", url, exc)
        raise HTTPException(status_code=502, detail="Browser rendering failed.")
