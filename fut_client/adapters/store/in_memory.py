"""In-memory credential store.

Per-process only: a restart forgets everything. Useful for tests and for
short-lived scripts that still want ``login_cached()`` within one run.
"""

from __future__ import annotations

import copy
from typing import Any

from fut_client.adapters.store.base import AbstractCredentialStore


class InMemoryCredentialStore(AbstractCredentialStore):
    """Dict-backed store that hands out deep copies of saved values."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def load(self, key: str) -> Any | None:
        value = self._values.get(key)
        return copy.deepcopy(value)

    async def save(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    def __contains__(self, key: object) -> bool:
        return key in self._values
