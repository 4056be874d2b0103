"""
Ephemeral browser sessions.

Each pairing run gets its own Playwright driver, browser and context; nothing
is shared between runs. The session is closed exactly once when the `async
with` block exits, whatever the reason (success, error, cancellation).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from pairing.automation.constants import LAUNCH_ARGS, USER_AGENT
from pairing.config import Settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[Settings], AsyncContextManager[Page]]


async def capture_failure_screenshot(page: Page, path: str) -> None:
    """Best-effort full-page screenshot for diagnostics; never raises."""
    if not path:
        return
    try:
        await page.screenshot(path=path, full_page=True)
        logger.info(f"Failure screenshot written to {path}")
    except (PlaywrightError, OSError) as e:
        logger.warning(f"Could not capture failure screenshot: {e}")


@asynccontextmanager
async def open_browser_session(settings: Settings) -> AsyncIterator[Page]:
    """
    Launch an isolated headless Chromium session and yield its page.

    Args:
        settings: Application settings (headless flag, screenshot path)

    Yields:
        A fresh Page in a brand-new browser context

    The browser is closed on every exit path. If the body raises, a
    diagnostic screenshot is attempted before closing.
    """
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=settings.HEADLESS,
            args=LAUNCH_ARGS,
        )
        logger.debug("Browser session opened")
        try:
            context = await browser.new_context(user_agent=USER_AGENT)
            page = await context.new_page()
            try:
                yield page
            except Exception:
                await capture_failure_screenshot(page, settings.ERROR_SCREENSHOT_PATH)
                raise
        finally:
            await browser.close()
            logger.debug("Browser session closed")
