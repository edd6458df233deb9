"""Credential store interface.

The client depends on this abstraction so persistence can live anywhere
(a file, a database, a secrets manager) without changing the dispatcher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Names of the two independent blobs the client persists.
COOKIE_KEY = "session-cookie"
DEFAULTS_KEY = "session-defaults"


class AbstractCredentialStore(ABC):
    """Interface for key/value persistence of session state."""

    @abstractmethod
    async def load(self, key: str) -> Any | None:
        """Load a previously saved value.

        Args:
            key: Blob name (``COOKIE_KEY`` or ``DEFAULTS_KEY``).

        Returns:
            The saved value, or None when nothing was saved.
        """
        raise NotImplementedError

    @abstractmethod
    async def save(self, key: str, value: Any) -> None:
        """Persist a value under ``key``, replacing any previous value."""
        raise NotImplementedError
