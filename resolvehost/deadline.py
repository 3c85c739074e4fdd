"""
Shared batch deadline
"""

import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from .errors import DeadlineExceeded


T = TypeVar('T')


class BatchDeadline:
    """
    Absolute deadline shared by every lookup in a batch.

    Created once when the batch starts. Lookups await through run(),
    which bounds them by the time left and turns expiry into
    DeadlineExceeded so callers handle it like any other DNS error.
    """

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        self.started = time.monotonic()
        self.expires_at = self.started + timeout_ms / 1000

    def remaining(self) -> float:
        """Seconds left before expiry (never negative)"""
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def elapsed(self) -> float:
        """Seconds since the deadline was created"""
        return time.monotonic() - self.started

    async def run(self, aw: Awaitable[T], what: str,
                  server: Optional[str] = None) -> T:
        """
        Await aw, cancelling it if the deadline passes first.

        Args:
            aw: Coroutine performing the lookup
            what: Name being looked up, used in the error
            server: Resolver description, used in the error

        Returns:
            Result of aw

        Raises:
            DeadlineExceeded: if the deadline expired before or during aw
        """
        remaining = self.remaining()
        if remaining <= 0:
            if asyncio.iscoroutine(aw):
                aw.close()
            elif asyncio.isfuture(aw):
                aw.cancel()
            raise DeadlineExceeded(what, server=server)

        try:
            return await asyncio.wait_for(aw, timeout=remaining)
        except asyncio.TimeoutError:
            if not self.expired:
                # raised by the lookup itself, not by wait_for
                raise
            raise DeadlineExceeded(what, server=server) from None
