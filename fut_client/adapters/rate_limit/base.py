"""Rate limiter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


class AbstractRateLimiter(ABC):
    """Interface for limiters gating coroutine operations."""

    @abstractmethod
    async def schedule(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run ``operation`` once the limiter releases it.

        The operation's result is returned and its exceptions propagate
        unchanged; the limiter only decides when it starts.
        """
        raise NotImplementedError

    async def raw(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run ``operation`` immediately, ignoring the gate."""
        return await operation(*args, **kwargs)
