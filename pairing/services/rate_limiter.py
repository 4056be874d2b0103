"""
In-memory fixed-window rate limiter keyed by client address.

A key's window opens on its first request and lasts `window_seconds`; at most
`points` requests are accepted inside it. State lives in process memory and
is lost on restart.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    started_at: float
    consumed: int


class FixedWindowRateLimiter:
    """Counts requests per key inside fixed windows."""

    def __init__(
        self,
        points: int = 5,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if points < 1 or window_seconds <= 0:
            raise ValueError("points must be >= 1 and window_seconds > 0")
        self.points = points
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}

    def consume(self, key: str) -> bool:
        """
        Record one request for `key`.

        Returns:
            True if the request fits in the current window, False if the
            key has exhausted its points
        """
        now = self._clock()
        self._prune(now)

        window = self._windows.get(key)
        if window is None:
            window = _Window(started_at=now, consumed=0)
            self._windows[key] = window

        if window.consumed >= self.points:
            logger.warning(f"Rate limit exhausted for client {key}")
            return False

        window.consumed += 1
        return True

    def retry_after(self, key: str) -> int:
        """Whole seconds until `key`'s window resets (0 if none is open)."""
        window = self._windows.get(key)
        if window is None:
            return 0
        remaining = window.started_at + self.window_seconds - self._clock()
        return max(0, int(remaining + 0.999))

    def reset(self) -> None:
        self._windows.clear()

    def _prune(self, now: float) -> None:
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
