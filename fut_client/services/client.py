"""Request dispatcher: session lifecycle plus rate-limited API calls.

The client moves through two states. It starts NotReady; ``login()`` or
``login_cached()`` installs a Session and makes it Ready for good. A later
login only swaps the Session; calls already queued on the old one still
run on it, and the old one closes once they are done.

Every ``api()`` call:
- merges the caller's options over the defaults,
- forces POST on the wire and carries the semantic verb in
  ``X-HTTP-Method-Override``,
- waits for the rate limiter unless ``override_limiter`` is set,
- classifies the response into a body, a TransportError or an
  ApplicationError.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Mapping

import httpx

from fut_client.adapters.rate_limit.base import AbstractRateLimiter
from fut_client.adapters.rate_limit.interval import IntervalRateLimiter
from fut_client.adapters.session.base import (
    LoginHandshake,
    LoginResult,
    PersistedState,
    Session,
)
from fut_client.adapters.session.factory import create_session_provider
from fut_client.adapters.session.restore import CachedSessionProvider
from fut_client.adapters.store.base import COOKIE_KEY, DEFAULTS_KEY, AbstractCredentialStore
from fut_client.adapters.store.callbacks import CallbackCredentialStore, LoadVariable, SaveVariable
from fut_client.core.classifier import classify_response
from fut_client.core.config import ClientSettings, settings as global_settings
from fut_client.core.errors import (
    AppError,
    ConfigurationError,
    NotReadyError,
    OriginalRequest,
)
from fut_client.core.logging import bind_call_context, reset_call_context
from fut_client.core.options import DEFAULT_OPTIONS, build_transport_request, merged_options
from fut_client.schemas.session import Credentials, TokenHandler

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("identity", "secret", "platform")


class Client:
    """Authenticated, rate-limited client for the remote API.

    Attributes:
        settings: Resolved client settings.
        credentials: Immutable account credentials.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        handshake: LoginHandshake | None = None,
        load_variable: LoadVariable | None = None,
        save_variable: SaveVariable | None = None,
        store: AbstractCredentialStore | None = None,
        two_factor_handler: TokenHandler | None = None,
        challenge_handler: TokenHandler | None = None,
        rate_limiter: AbstractRateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Validate configuration and wire the collaborators.

        Args:
            settings: Client settings; defaults to the environment-driven ones.
            handshake: Login handshake used by the interactive variant.
            load_variable: Optional hook returning a persisted value by key.
            save_variable: Optional hook persisting a value by key.
            store: Full credential store; takes precedence over the hooks.
            two_factor_handler: Returns a two-factor code when asked.
            challenge_handler: Returns a challenge solution when asked.
            rate_limiter: Limiter for throttled calls; defaults to one
                dispatch per ``60 / requests_per_minute`` seconds.
            transport: Optional httpx transport shared by every session.

        Raises:
            ConfigurationError: If a credential field is missing or the
                login variant is unknown.
        """
        self.settings = settings or global_settings.client

        for name in _REQUIRED_FIELDS:
            if not getattr(self.settings, name):
                raise ConfigurationError(
                    code=f"missing_{name}",
                    message=f"{name.capitalize()} is required",
                    details={"field": name},
                )

        self.credentials = Credentials(
            identity=self.settings.identity,
            secret=self.settings.secret,
            platform=self.settings.platform,
            two_factor_handler=two_factor_handler,
            challenge_handler=challenge_handler,
        )
        self._store = store or CallbackCredentialStore(load_variable, save_variable)
        self._limiter = rate_limiter or IntervalRateLimiter(self.settings.requests_per_minute)
        self._provider = create_session_provider(
            self.settings.login_variant,
            handshake=handshake,
            proxy=self.settings.proxy,
            timeout_seconds=self.settings.timeout_seconds,
            transport=transport,
        )
        self._cached_provider = CachedSessionProvider(proxy=self.settings.proxy, transport=transport)
        self._session: Session | None = None
        self._ready = False

    @property
    def is_ready(self) -> bool:
        """True once a login succeeded; never reverts, not even after ``close()``."""
        return self._ready

    @property
    def session(self) -> Session | None:
        return self._session

    async def login(self) -> None:
        """Establish a session with the configured provider and persist it.

        Raises:
            MissingCacheError: With the restore variant, when nothing was saved.
            AppError: Any error raised by the handshake or the handlers.
        """
        persisted = PersistedState(
            cookies=await self._store.load(COOKIE_KEY),
            defaults=await self._store.load(DEFAULTS_KEY),
        )
        result = await self._provider.establish_session(self.credentials, persisted)

        try:
            if result.cookies is not None:
                await self._store.save(COOKIE_KEY, result.cookies)
            if result.defaults is not None:
                await self._store.save(DEFAULTS_KEY, result.defaults)
        except Exception:
            await result.session.close()
            raise

        await self._install(result)

    async def login_cached(self) -> None:
        """Restore the last saved session without any network call.

        Raises:
            MissingCacheError: If no session defaults were ever saved.
        """
        persisted = PersistedState(defaults=await self._store.load(DEFAULTS_KEY))
        result = await self._cached_provider.establish_session(self.credentials, persisted)
        await self._install(result)

    async def _install(self, result: LoginResult) -> None:
        previous, self._session = self._session, result.session
        self._ready = True
        if previous is not None:
            await previous.retire()
        logger.info(
            "client.ready",
            extra={
                "replaced_session": previous is not None,
                "draining_calls": previous.pending if previous is not None else 0,
            },
        )

    async def api(self, url: str, options: Mapping[str, Any] | None = None) -> Any:
        """Call the remote API.

        Args:
            url: Endpoint URL, absolute or relative to the session base URL.
            options: ``RequestOptions``; ``method_override`` defaults to GET.

        Returns:
            The parsed response body.

        Raises:
            NotReadyError: If no session has been established yet, or the
                client was closed.
            TransportError: On a non-2xx response.
            ApplicationError: When the body reports an error code.
            httpx.HTTPError: On connection failures and timeouts.
        """
        if self._session is None:
            if self._ready:
                raise NotReadyError(
                    code="session_closed",
                    message="Client was closed, run login() or login_cached() again",
                )
            raise NotReadyError(
                code="client_not_ready",
                message="Client is not ready yet, run login() or login_cached() first",
            )

        options = merged_options(DEFAULT_OPTIONS, options)
        request = build_transport_request(url, options)
        original_request: OriginalRequest = {
            "url": url,
            "options": {k: v for k, v in request.items() if k != "url"},
        }
        session = self._session
        session.hold()

        token = bind_call_context(
            request_id=str(uuid.uuid4()),
            url=url,
            method_override=options["method_override"],
        )
        start = time.perf_counter()
        try:
            if options.get("override_limiter"):
                response = await self._limiter.raw(session.execute, request)
            else:
                response = await self._limiter.schedule(session.execute, request)

            logger.info(
                "api.dispatch",
                extra={
                    "url": url,
                    "override_limiter": bool(options.get("override_limiter")),
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            return classify_response(response, original_request)
        except AppError as exc:
            logger.warning(
                "api.error",
                extra={
                    "url": url,
                    "error_type": type(exc).__name__,
                    "error_code": exc.code,
                },
            )
            raise
        finally:
            reset_call_context(token)
            await session.release()

    async def close(self) -> None:
        """Close the current session once its pending calls finish.

        The client stays Ready, but ``api()`` raises ``NotReadyError``
        (code ``session_closed``) until ``login()`` or ``login_cached()``
        installs a fresh session.
        """
        session, self._session = self._session, None
        if session is not None:
            await session.retire()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
