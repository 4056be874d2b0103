"""
Device pairing workflow.

Logs into nanomid.com with the configured account, opens the device
management page, fills the Quickcode and device name, submits, and reads
the confirmation toast.

Step order:
  1. Login page -> email, password, "Log in" -> wait for /dashboard
  2. Devices page
  3. OTP field, label field (selector cascades)
  4. Submit control (selector cascade)
  5. Settle, then check success / error markers

The routine never raises: every failure is returned as a PairingResult.
"""

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pairing.automation import constants
from pairing.automation.browser import SessionFactory, open_browser_session
from pairing.automation.errors import (
    ConfigurationError,
    ConfirmationNotDetected,
    DeadlineExceeded,
    NavigationTimeout,
    PairingError,
    UnexpectedFault,
    describe_error,
)
from pairing.automation.selectors import click_control, fill_field
from pairing.automation.types import PairingResult, failure, success
from pairing.config import Settings
from pairing.utils.logging import mask_secret

logger = logging.getLogger(__name__)


async def _goto(page: Page, url: str, settings: Settings) -> None:
    try:
        await page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=settings.NAVIGATION_TIMEOUT_MS,
        )
    except PlaywrightTimeoutError as e:
        raise NavigationTimeout(f"{url} did not load within {settings.NAVIGATION_TIMEOUT_MS} ms") from e


async def _login(page: Page, settings: Settings) -> None:
    await _goto(page, settings.LOGIN_URL, settings)
    await fill_field(page, settings.NANOMID_EMAIL, constants.EMAIL_FIELD, "email")
    await fill_field(page, settings.NANOMID_PASSWORD, constants.PASSWORD_FIELD, "password")
    await click_control(page, constants.LOGIN_BUTTON, "log in")

    try:
        await page.wait_for_url(
            constants.DASHBOARD_URL_PATTERN,
            timeout=settings.NAVIGATION_TIMEOUT_MS,
        )
    except PlaywrightTimeoutError as e:
        raise NavigationTimeout(
            f"dashboard did not load within {settings.NAVIGATION_TIMEOUT_MS} ms"
        ) from e
    logger.info("Login succeeded")


async def _marker_visible(page: Page, marker) -> bool:
    try:
        return await page.get_by_text(marker).first.is_visible()
    except PlaywrightError:
        return False


async def _is_confirmed(page: Page, settle_delay_ms: int) -> bool:
    """Success needs an affirmative marker and no error marker."""
    await page.wait_for_timeout(settle_delay_ms)
    confirmed = await _marker_visible(page, constants.SUCCESS_MARKER)
    rejected = await _marker_visible(page, constants.ERROR_MARKER)
    logger.debug(f"Confirmation markers: success={confirmed} error={rejected}")
    return confirmed and not rejected


async def _run_steps(page: Page, settings: Settings, otp: str, label: str) -> None:
    await _login(page, settings)

    await _goto(page, settings.DEVICES_URL, settings)

    await fill_field(page, otp, constants.OTP_FIELD, "OTP / Quickcode")
    await fill_field(page, label, constants.LABEL_FIELD, "device name")
    await click_control(page, constants.PAIR_BUTTON, "sync / pair")

    if not await _is_confirmed(page, settings.SETTLE_DELAY_MS):
        raise ConfirmationNotDetected("pairing was not confirmed in the UI")


async def _run_session(
    settings: Settings,
    otp: str,
    label: str,
    open_session: SessionFactory,
) -> None:
    """Open the session, run every step, close the session."""
    try:
        async with open_session(settings) as page:
            await _run_steps(page, settings, otp, label)
    except TimeoutError as e:
        # Only expiry of the overall deadline may surface as a timeout
        raise UnexpectedFault(str(e) or type(e).__name__) from e


async def pair_device(
    settings: Settings,
    otp: str,
    label: str,
    open_session: SessionFactory = open_browser_session,
) -> PairingResult:
    """
    Pair a device with the configured nanomid.com account.

    Args:
        settings: Explicit configuration (credentials, timeouts, paths)
        otp: Quickcode shown on the device (trimmed, non-empty)
        label: Device name to register (trimmed, non-empty)
        open_session: Factory for the browser session context manager;
            tests inject a simulated site here

    Returns:
        PairingResult: {"ok": True} on confirmed pairing, otherwise
        {"ok": False, "error": "<Kind>: <message>"}
    """
    missing = settings.missing_credentials()
    if missing:
        error = ConfigurationError(f"set {' and '.join(missing)}")
        logger.error(f"Pairing refused: {error}")
        return failure(describe_error(error))

    logger.info(f"Pairing started for label={label!r} otp={mask_secret(otp)}")

    try:
        await asyncio.wait_for(
            _run_session(settings, otp, label, open_session),
            timeout=settings.WORKFLOW_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        error = DeadlineExceeded(
            f"pairing did not finish within {settings.WORKFLOW_TIMEOUT_SECONDS:g} s"
        )
        logger.warning(f"Pairing failed: {error}")
        return failure(describe_error(error))
    except PairingError as e:
        logger.warning(f"Pairing failed: {describe_error(e)}")
        return failure(describe_error(e))
    except Exception as e:
        logger.error(f"Unexpected pairing error: {e}", exc_info=True)
        return failure(describe_error(e))

    logger.info(f"Pairing confirmed for label={label!r}")
    return success()
