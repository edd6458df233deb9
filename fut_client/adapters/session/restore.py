"""Restore session provider: rebuilds a session from saved defaults."""

from __future__ import annotations

import logging

import httpx

from fut_client.adapters.session.base import (
    AbstractSessionProvider,
    LoginResult,
    PersistedState,
    Session,
)
from fut_client.core.errors import MissingCacheError
from fut_client.schemas.session import Credentials, SessionDefaults

logger = logging.getLogger(__name__)


class CachedSessionProvider(AbstractSessionProvider):
    """Reconstruct a session from the persisted defaults blob.

    No network I/O happens here; whether the saved session is still valid
    is only discovered by the first API call.
    """

    variant = "restore"

    def __init__(
        self,
        *,
        proxy: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._proxy = proxy
        self._transport = transport

    async def establish_session(
        self,
        credentials: Credentials,
        persisted: PersistedState,
    ) -> LoginResult:
        if not persisted.defaults:
            raise MissingCacheError(
                code="missing_session_cache",
                message="Session defaults are not saved. Use an interactive login first.",
                details={"hint": "Call login() once so the session can be cached"},
            )

        defaults = SessionDefaults.from_persisted(persisted.defaults)
        if self._proxy:
            defaults = defaults.model_copy(update={"proxy": self._proxy})

        logger.info(
            "session.restore.success",
            extra={"variant": self.variant, "platform": credentials.platform},
        )
        # Nothing new to persist: the blobs came from the store.
        return LoginResult(session=Session.open(defaults, transport=self._transport))
