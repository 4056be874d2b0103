"""
Bounded pool of browser session slots.

Caps the number of automation runs in flight. Acquisition never waits: when
every slot is taken the caller is rejected with CapacityExceeded (HTTP 503).
All access happens on the event loop thread, so a plain counter suffices.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pairing.automation.errors import CapacityExceeded

logger = logging.getLogger(__name__)


class SessionSlots:
    """Non-blocking counter of in-flight browser sessions."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self.in_use = 0

    @property
    def available(self) -> int:
        return self.capacity - self.in_use

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[None]:
        """
        Hold one slot for the duration of the `async with` block.

        Raises:
            CapacityExceeded: If all slots are taken
        """
        if self.in_use >= self.capacity:
            logger.warning(f"All {self.capacity} browser session slots busy")
            raise CapacityExceeded(
                f"all {self.capacity} browser sessions are busy, try again shortly"
            )
        self.in_use += 1
        try:
            yield
        finally:
            self.in_use -= 1
