"""
Device pairing endpoint.

Endpoint flow for POST /api/pair:
- Step 1: Rate limit by client address -> RateLimited (429)
- Step 2: Validate otp / label -> ValidationError (400)
- Step 3: Reserve a browser session slot -> CapacityExceeded (503)
- Step 4: Run the automation routine
- Step 5: Map PairingResult -> 200 / 400, unexpected fault -> 500

PairingError subclasses are rendered by the handler registered in main.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from pairing.automation import pair_device
from pairing.automation.errors import PairingError, RateLimited, ValidationError
from pairing.config import Settings, get_settings, settings
from pairing.schemas.pairing import ErrorResponse, PairRequest, PairResponse
from pairing.services import FixedWindowRateLimiter, SessionSlots
from pairing.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["pairing"])

_rate_limiter = FixedWindowRateLimiter(
    points=settings.RATE_LIMIT_POINTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)
_session_slots = SessionSlots(capacity=settings.MAX_CONCURRENT_SESSIONS)

RATE_LIMIT_MESSAGE = "Too many attempts, try again in 1 minute."
VALIDATION_MESSAGE = "otp and label are required."
PAIRING_FAILED_MESSAGE = "Pairing failed."
SERVER_ERROR_MESSAGE = "Server error."


def get_rate_limiter() -> FixedWindowRateLimiter:
    return _rate_limiter


def get_session_slots() -> SessionSlots:
    return _session_slots


def client_key(request: Request) -> str:
    """Rate-limit key: the peer address as seen by the server."""
    return request.client.host if request.client else "unknown"


async def enforce_rate_limit(
    request: Request,
    limiter: Annotated[FixedWindowRateLimiter, Depends(get_rate_limiter)],
) -> None:
    """Reject the request once the client's window is exhausted."""
    key = client_key(request)
    if not limiter.consume(key):
        raise RateLimited(RATE_LIMIT_MESSAGE, retry_after=limiter.retry_after(key))


@router.post(
    "/pair",
    response_model=PairResponse,
    status_code=status.HTTP_200_OK,
    summary="Pair a device using its Quickcode",
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    dependencies=[Depends(enforce_rate_limit)],
)
async def pair(
    body: PairRequest,
    app_settings: Annotated[Settings, Depends(get_settings)],
    slots: Annotated[SessionSlots, Depends(get_session_slots)],
) -> PairResponse:
    """
    Pair a device with the configured nanomid.com account.

    Logs into the site in a fresh headless browser, fills the Quickcode and
    label on the devices page and waits for the confirmation toast.

    **Returns:**
    - 200 OK: Pairing confirmed by the site
    - 400 BAD REQUEST: Missing fields, or the site did not confirm
    - 429 TOO MANY REQUESTS: 5 requests per minute per client exceeded
    - 503 SERVICE UNAVAILABLE: All browser sessions busy
    - 500 INTERNAL SERVER ERROR: Unexpected fault
    """
    if not body.otp or not body.label:
        logger.warning("POST /api/pair rejected: otp or label missing")
        raise ValidationError(VALIDATION_MESSAGE)

    logger.info(f"POST /api/pair: pairing device label={body.label!r}")

    try:
        async with slots.acquire():
            result = await pair_device(app_settings, otp=body.otp, label=body.label)

    except PairingError:
        raise

    except Exception as e:
        logger.error(f"Error pairing device: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SERVER_ERROR_MESSAGE,
        )

    if result["ok"]:
        return PairResponse()

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=result.get("error") or PAIRING_FAILED_MESSAGE,
    )
