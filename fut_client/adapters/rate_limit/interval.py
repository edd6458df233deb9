"""Minimum-interval rate limiter for a single asyncio event loop.

Notes:
- One operation in flight at a time; the next one starts only after the
  previous one finished and the interval since its dispatch elapsed.
- Waiters are released in arrival order (``asyncio.Lock`` is FIFO).
- Per-instance only: two clients never share a limiter.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

from fut_client.adapters.rate_limit.base import AbstractRateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_REQUESTS_PER_MINUTE = 10


class IntervalRateLimiter(AbstractRateLimiter):
    """Serialize operations to at most one dispatch per ``60 / rpm`` seconds."""

    def __init__(
        self,
        requests_per_minute: int = DEFAULT_REQUESTS_PER_MINUTE,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the limiter.

        Args:
            requests_per_minute: Maximum dispatches per minute.
            clock: Monotonic time source in seconds.
            sleep: Coroutine used to wait; injectable for tests.

        Raises:
            ValueError: If requests_per_minute is below 1.
        """
        if requests_per_minute < 1:
            raise ValueError("requests_per_minute must be >= 1")

        self._interval = 60.0 / requests_per_minute
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch_at: float | None = None
        self._dispatch_count = 0

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def last_dispatch_at(self) -> float | None:
        return self._last_dispatch_at

    @property
    def dispatch_count(self) -> int:
        return self._dispatch_count

    async def _wait_for_slot(self) -> None:
        if self._last_dispatch_at is None:
            return
        wait_time = self._last_dispatch_at + self._interval - self._clock()
        if wait_time > 0:
            logger.debug("rate_limit.wait", extra={"wait_s": round(wait_time, 3)})
            await self._sleep(wait_time)

    async def schedule(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        async with self._lock:
            await self._wait_for_slot()
            self._last_dispatch_at = self._clock()
            self._dispatch_count += 1
            return await operation(*args, **kwargs)
