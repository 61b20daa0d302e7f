"""Playwright-based fetcher for pages that only render their content in JavaScript."""

from typing import Tuple

from playwright.async_api import async_playwright

from socialposter.services.fetcher import MAX_CONTENT_SIZE, USER_AGENT, validate_url

TIMEOUT_MS = 15_000  # navigation timeout
SETTLE_MS = 2_000  # let late scripts finish painting after load


async def fetch_url_with_browser(url: str, *, wait_ms: int = SETTLE_MS) -> Tuple[str, str]:
    """Render *url* with a headless Chromium browser.

    Args:
        url: The target URL (must be http/https and public).
        wait_ms: Milliseconds to wait after the page loads before reading the DOM.

    Returns:
        ``(html, final_url)`` of the rendered page.

    Raises:
        ValueError: if the URL fails SSRF / scheme validation.
        RuntimeError: if the rendered HTML exceeds MAX_CONTENT_SIZE.
        playwright.async_api.Error: on browser/network errors.
    """
    validate_url(url)

    async with async_playwright() as pw:
        browser = await pw.chromium.launch(
            headless=True,
            args=[
                # --no-sandbox is required when running as root inside a container
                "--no-sandbox",
                "--disable-dev-shm-usage",
                "--disable-gpu",
            ],
        )
        context = await browser.new_context(user_agent=USER_AGENT)
        page = await context.new_page()
        try:
            await page.goto(url, wait_until="load", timeout=TIMEOUT_MS)
            if wait_ms > 0:
                await page.wait_for_timeout(wait_ms)
            html = await page.content()
            final_url = page.url
        finally:
            await context.close()
            await browser.close()

    if len(html.encode()) > MAX_CONTENT_SIZE:
        raise RuntimeError("Rendered HTML exceeds the maximum allowed size.")

    # Redirects inside the browser are not re-validated, but the final URL is
    validate_url(final_url)
    return html, final_url
