"""
Health check endpoint schemas.

The health endpoint is public and returns a simple status indicator.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    ok: bool = Field(
        default=True,
        description="Always true if the API is responding",
        examples=[True]
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "ok": True
            }
        }
    }
