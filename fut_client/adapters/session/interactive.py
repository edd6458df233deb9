"""Interactive session provider: runs the full login handshake."""

from __future__ import annotations

import logging

import httpx

from fut_client.adapters.session.base import (
    AbstractSessionProvider,
    LoginHandshake,
    LoginResult,
    PersistedState,
    Session,
    build_http_client,
    dump_cookies,
    seed_cookies,
)
from fut_client.schemas.session import Credentials, SessionDefaults

logger = logging.getLogger(__name__)


class InteractiveSessionProvider(AbstractSessionProvider):
    """Authenticate through a ``LoginHandshake`` and keep its HTTP client.

    The client used for the handshake becomes the session's client, so the
    cookies set during login travel with every API call.
    """

    variant = "interactive"

    def __init__(
        self,
        handshake: LoginHandshake,
        *,
        proxy: str | None = None,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._handshake = handshake
        self._proxy = proxy
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def establish_session(
        self,
        credentials: Credentials,
        persisted: PersistedState,
    ) -> LoginResult:
        client = build_http_client(
            SessionDefaults(proxy=self._proxy, timeout_seconds=self._timeout_seconds),
            transport=self._transport,
        )

        # Resume a partially valid session instead of starting cold
        if persisted.cookies:
            seed_cookies(client.cookies, persisted.cookies)
            logger.info(
                "session.cookies_restored",
                extra={"cookie_count": len(persisted.cookies)},
            )

        try:
            defaults = await self._handshake.login(credentials, client)
        except Exception:
            await client.aclose()
            raise

        defaults = defaults.model_copy(
            update={
                "proxy": self._proxy,
                "timeout_seconds": self._timeout_seconds,
                "jar": client.cookies,
            }
        )
        client.headers.update(defaults.headers)
        client.params = client.params.merge(defaults.params)
        client.timeout = httpx.Timeout(defaults.timeout_seconds)
        if defaults.base_url:
            client.base_url = defaults.base_url

        logger.info(
            "session.login.success",
            extra={"variant": self.variant, "platform": credentials.platform},
        )
        return LoginResult(
            session=Session(defaults, client),
            cookies=dump_cookies(client.cookies),
            defaults=defaults.to_persisted(),
        )
