"""Session handle and session provider interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import httpx

from fut_client.schemas.session import CookieRecord, Credentials, SessionDefaults

# Request keys forwarded to the HTTP transport; everything else is a
# client-side option.
TRANSPORT_KEYS = frozenset({"headers", "params", "json", "content", "data", "files", "timeout"})


@dataclass(frozen=True)
class TransportResponse:
    """What the classifier needs from an HTTP response."""

    status_code: int
    status_message: str
    body: Any


@dataclass
class PersistedState:
    """Blobs loaded from the credential store before establishing a session."""

    cookies: list[dict[str, Any]] | None = None
    defaults: dict[str, Any] | None = None


def build_http_client(
    defaults: SessionDefaults,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` configured from session defaults."""
    return httpx.AsyncClient(
        base_url=defaults.base_url,
        headers=defaults.headers,
        params=defaults.params,
        cookies=defaults.jar,
        proxy=defaults.proxy,
        timeout=defaults.timeout_seconds,
        transport=transport,
    )


def dump_cookies(cookies: httpx.Cookies) -> list[dict[str, Any]]:
    """Serialize a cookie jar into a list of plain dicts."""
    return [
        CookieRecord(
            name=cookie.name,
            value=cookie.value or "",
            domain=cookie.domain,
            path=cookie.path,
        ).model_dump()
        for cookie in cookies.jar
    ]


def seed_cookies(cookies: httpx.Cookies, blob: Iterable[Mapping[str, Any]]) -> None:
    """Load persisted cookies into a live jar."""
    for item in blob:
        record = CookieRecord.model_validate(item)
        cookies.set(record.name, record.value, domain=record.domain, path=record.path)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Session:
    """An authenticated transport handle.

    Holds the transport defaults and the HTTP client built from them. The
    dispatcher owns exactly one Session at a time and never shares it.
    """

    def __init__(self, defaults: SessionDefaults, client: httpx.AsyncClient) -> None:
        self.defaults = defaults
        self._client = client
        self._pending = 0
        self._retired = False

    @classmethod
    def open(
        cls,
        defaults: SessionDefaults,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Session":
        """Build a session from defaults alone, without any network I/O."""
        return cls(defaults, build_http_client(defaults, transport=transport))

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def execute(self, request: Mapping[str, Any]) -> TransportResponse:
        """Send one request and return its status and parsed body.

        Args:
            request: Must contain ``method`` and ``url``; keys listed in
                ``TRANSPORT_KEYS`` are forwarded to httpx, others are ignored.

        Raises:
            httpx.HTTPError: On connection failures and timeouts.
        """
        kwargs = {k: v for k, v in request.items() if k in TRANSPORT_KEYS}
        response = await self._client.request(request["method"], request["url"], **kwargs)
        return TransportResponse(
            status_code=response.status_code,
            status_message=response.reason_phrase,
            body=_parse_body(response),
        )

    @property
    def pending(self) -> int:
        """Number of calls holding this session, queued or in flight."""
        return self._pending

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def hold(self) -> None:
        """Register a call that will run on this session."""
        self._pending += 1

    async def release(self) -> None:
        """Unregister a call; closes a retired session once nothing holds it."""
        self._pending -= 1
        if self._retired and self._pending == 0:
            await self.close()

    async def retire(self) -> None:
        """Stop handing out this session and close it once its calls drain.

        Calls already queued behind the rate limiter keep running on it.
        """
        self._retired = True
        if self._pending == 0:
            await self.close()

    async def close(self) -> None:
        await self._client.aclose()


@dataclass
class LoginResult:
    """A freshly established session plus the blobs to persist.

    ``None`` for a blob means there is nothing to persist.
    """

    session: Session
    cookies: list[dict[str, Any]] | None = None
    defaults: dict[str, Any] | None = None


class LoginHandshake(ABC):
    """The remote service's multi-step login, supplied by the caller."""

    @abstractmethod
    async def login(self, credentials: Credentials, client: httpx.AsyncClient) -> SessionDefaults:
        """Authenticate using ``client`` and return the session defaults.

        Implementations drive the handshake through ``client`` (whose cookie
        jar may already hold a resumed session), call
        ``credentials.solve_two_factor`` / ``credentials.solve_challenge``
        when the service asks for them, and return the headers, params and
        base URL every subsequent API call needs.
        """
        ...


class AbstractSessionProvider(ABC):
    """Interface for the closed set of ways a session can be established."""

    variant: str

    @abstractmethod
    async def establish_session(
        self,
        credentials: Credentials,
        persisted: PersistedState,
    ) -> LoginResult:
        """Produce a Session.

        Args:
            credentials: Account credentials.
            persisted: Blobs previously saved by the client, if any.

        Returns:
            LoginResult with the session and the blobs to persist.
        """
        ...
