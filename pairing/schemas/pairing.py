"""
Pydantic schemas for the device pairing endpoint.

These models define the request/response contracts for POST /api/pair.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class PairRequest(BaseModel):
    """
    Request for pairing a device with the configured account.

    Both fields are required by the endpoint. They are declared optional here
    so that a missing field yields the endpoint's own 400 response instead of
    a schema error; blank values are normalized to None.
    """
    otp: Optional[str] = Field(
        None,
        description="One-time Quickcode shown on the device",
        examples=["123456"]
    )
    label: Optional[str] = Field(
        None,
        description="Name the device will carry in the account",
        examples=["Kitchen TV"]
    )

    @field_validator("otp", "label", mode="before")
    @classmethod
    def strip_and_coerce(cls, v: Any) -> Any:
        """Accept numeric codes, trim whitespace, treat blank as missing."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class PairResponse(BaseModel):
    """Response after a confirmed pairing."""
    ok: Literal[True] = True


class ErrorResponse(BaseModel):
    """Error body shared by every non-2xx response."""
    error: str = Field(..., description="Human-readable reason")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "otp and label are required."},
                {"error": "NavigationTimeout: dashboard did not load within 20000 ms"},
            ]
        }
    }
