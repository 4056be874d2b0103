"""
FastAPI application entry point for the device pairing gateway.

This module creates the FastAPI app instance, wires middleware (CORS,
security headers), error rendering, and registers all routers.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pairing.automation.errors import (
    CapacityExceeded,
    PairingError,
    RateLimited,
    ValidationError,
)
from pairing.config import settings
from pairing.routes.health import router as health_router
from pairing.routes.pairing import VALIDATION_MESSAGE
from pairing.routes.pairing import router as pairing_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# Helmet's default response headers
SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    RateLimited: status.HTTP_429_TOO_MANY_REQUESTS,
    CapacityExceeded: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins from FRONTEND_ORIGIN.

    Unset means any origin may call the API (the web frontend's domain is
    not fixed yet). A comma-separated list restricts callers.
    """
    origins = settings.cors_origins()
    if origins == ["*"]:
        if settings.is_production():
            logger.warning(
                "FRONTEND_ORIGIN not set in production. All origins are allowed."
            )
        else:
            logger.info("CORS configured to allow all origins")
    else:
        logger.info(f"CORS configured with {len(origins)} allowed origins")
    return origins


# Create FastAPI app
app = FastAPI(
    title="Device Pairing Gateway",
    description="Pairs devices with a nanomid.com account by Quickcode",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(PairingError)
async def pairing_error_handler(request: Request, exc: PairingError):
    """Render gateway-level pairing errors as {"error": ...}."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    headers = None
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc)},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Flatten HTTPException details into the {"error": ...} shape."""
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


# Malformed or missing bodies are reported as plain 400s
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    Request bodies are not logged: they carry the OTP.
    """
    logger.warning(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": VALIDATION_MESSAGE},
    )


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(pairing_router)

missing_credentials = settings.missing_credentials()
if missing_credentials:
    logger.warning(
        f"Missing required environment variables: {', '.join(missing_credentials)}. "
        "Every pairing request will fail until they are set."
    )

logger.info("FastAPI app initialized successfully")
