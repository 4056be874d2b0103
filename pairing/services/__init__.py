"""
Service layer for the pairing gateway.

Holds the process-local state the HTTP layer needs around the automation
routine:
- per-client fixed-window rate limiting
- the bounded pool of concurrent browser sessions
"""

from .rate_limiter import FixedWindowRateLimiter
from .session_slots import SessionSlots

__all__ = [
    "FixedWindowRateLimiter",
    "SessionSlots",
]
