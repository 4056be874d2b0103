"""
Pairing type definitions.

Strictly typed input/output contracts for the automation routine.
All types are JSON-serializable and compatible with Pydantic.
"""

from typing import Optional, TypedDict


class PairingResult(TypedDict):
    """Outcome of one pairing run. Never stored."""
    ok: bool
    error: Optional[str]  # '<Kind>: <message>' when ok is False


def success() -> PairingResult:
    return {"ok": True, "error": None}


def failure(error: str) -> PairingResult:
    return {"ok": False, "error": error}
