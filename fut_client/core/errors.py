"""Client exception types.

Every failure raised by the client derives from ``AppError`` so callers can
catch the whole family at once, or pick the specific kind they can recover
from (e.g. ``MissingCacheError`` -> fall back to an interactive login).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and callers."""

    hint: str
    field: str
    variant: str
    key: str
    context: NotRequired[dict[str, Any]]


class OriginalRequest(TypedDict):
    """The request that produced a failed response."""

    url: str
    options: dict[str, Any]


@dataclass
class AppError(Exception):
    """Base error for client failures.

    Attributes:
        code: Machine-readable error code. A string for local failures,
            the numeric code reported by the remote API for
            ``ApplicationError``.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str | int | None
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ConfigurationError(AppError):
    """Raised at construction time when the client cannot be configured."""


class MissingCacheError(AppError):
    """Raised when a cached session is requested but none was saved."""


class NotReadyError(AppError):
    """Raised when ``api()`` is called before a successful login."""


@dataclass
class TransportError(AppError):
    """Raised for any non-2xx HTTP response."""

    status_code: int = 0
    status_message: str = ""
    body: Any = None
    original_request: OriginalRequest | None = None


@dataclass
class ApplicationError(AppError):
    """Raised for a 2xx response whose body reports a remote failure."""

    body: Any = None
    original_request: OriginalRequest | None = None
