"""
Health check route for the pairing gateway.

This endpoint is PUBLIC, not rate limited, and never touches the browser.
"""

from fastapi import APIRouter

from pairing.schemas.health import HealthResponse
from pairing.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """Public health check; always returns {"ok": true}."""
    logger.debug("Health check endpoint called")

    return HealthResponse(ok=True)
