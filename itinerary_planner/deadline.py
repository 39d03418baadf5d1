"""A single time budget shared by every call of one generation request."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]


class DeadlineExceeded(Exception):
    """Raised when the shared budget runs out before or during a call."""


class Deadline:
    def __init__(self, timeout: float, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self.timeout = timeout
        self.expires_at = clock() + timeout

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` within the remaining budget, cancelling it on expiry."""

        remaining = self.remaining()
        if remaining <= 0:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise DeadlineExceeded(f"deadline of {self.timeout:.1f}s already elapsed")
        try:
            return await asyncio.wait_for(awaitable, timeout=remaining)
        except asyncio.TimeoutError as exc:
            raise DeadlineExceeded(f"deadline of {self.timeout:.1f}s elapsed") from exc
