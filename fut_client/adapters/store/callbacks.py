"""Credential store backed by caller-supplied load/save callables."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

from fut_client.adapters.store.base import AbstractCredentialStore

logger = logging.getLogger(__name__)

LoadVariable = Callable[[str], Any]
SaveVariable = Callable[[str, Any], Any]


class CallbackCredentialStore(AbstractCredentialStore):
    """Adapt optional ``load_variable`` / ``save_variable`` hooks.

    Either hook may be a plain function or a coroutine function, and either
    may be missing: a missing loader behaves as an empty store and a missing
    saver silently drops writes. A store with only one of the two hooks is
    valid.
    """

    def __init__(
        self,
        load_variable: LoadVariable | None = None,
        save_variable: SaveVariable | None = None,
    ) -> None:
        self._load_variable = load_variable
        self._save_variable = save_variable

    async def load(self, key: str) -> Any | None:
        if self._load_variable is None:
            logger.debug("store.load.skipped", extra={"key": key, "reason": "no_loader"})
            return None
        value = self._load_variable(key)
        if inspect.isawaitable(value):
            value = await value
        logger.debug("store.load", extra={"key": key, "found": value is not None})
        return value

    async def save(self, key: str, value: Any) -> None:
        if self._save_variable is None:
            logger.debug("store.save.skipped", extra={"key": key, "reason": "no_saver"})
            return
        result = self._save_variable(key, value)
        if inspect.isawaitable(result):
            await result
        logger.debug("store.save", extra={"key": key})
