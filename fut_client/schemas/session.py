"""Session schemas: credentials, transport defaults and persisted cookies."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

from fut_client.core.errors import ConfigurationError

# Handlers receive provider-defined context and return the solved token,
# either directly or as an awaitable.
TokenHandler = Callable[[Any], Awaitable[str] | str]


async def _invoke_handler(handler: TokenHandler | None, name: str, context: Any) -> str:
    if handler is None:
        raise ConfigurationError(
            code=f"missing_{name}",
            message=f"Login handshake requires a {name.replace('_', ' ')} but none was configured",
            details={"field": name},
        )
    result = handler(context)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass(frozen=True)
class Credentials:
    """Account credentials, immutable for the life of a client.

    Attributes:
        identity: Account identity (e-mail or user name).
        secret: Account secret.
        platform: Platform the account plays on.
        two_factor_handler: Returns a two-factor code when the handshake asks for one.
        challenge_handler: Returns a captcha/challenge solution when asked.
    """

    identity: str
    secret: str = field(repr=False)
    platform: str
    two_factor_handler: TokenHandler | None = field(default=None, repr=False)
    challenge_handler: TokenHandler | None = field(default=None, repr=False)

    async def solve_two_factor(self, context: Any = None) -> str:
        """Ask the caller for a two-factor code and wait for it."""
        return await _invoke_handler(self.two_factor_handler, "two_factor_handler", context)

    async def solve_challenge(self, context: Any = None) -> str:
        """Ask the caller to solve a challenge (captcha) and wait for it."""
        return await _invoke_handler(self.challenge_handler, "challenge_handler", context)


class CookieRecord(BaseModel):
    """A single persisted cookie."""

    name: str
    value: str
    domain: str = ""
    path: str = "/"


class SessionDefaults(BaseModel):
    """Transport defaults applied to every request of an authenticated session.

    ``jar`` holds the live cookie jar while a session is being built. It is
    not serializable and is always stripped from the persisted form.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: str = Field(
        "",
        description="Base URL that relative request URLs are resolved against",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request (session id, tokens, user agent)",
    )
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Query parameters sent with every request",
    )
    proxy: str | None = Field(
        None,
        description="Proxy URL for every request",
    )
    timeout_seconds: float = Field(
        30.0,
        description="Transport timeout in seconds",
    )
    jar: Any = Field(
        None,
        description="Live cookie jar; never persisted",
    )

    def to_persisted(self) -> dict[str, Any]:
        """Return a JSON-serializable copy without the cookie jar."""
        return self.model_dump(mode="json", exclude={"jar"})

    @classmethod
    def from_persisted(cls, blob: dict[str, Any]) -> "SessionDefaults":
        """Rebuild defaults from a persisted blob, ignoring any stray jar."""
        data = {k: v for k, v in blob.items() if k != "jar"}
        return cls.model_validate(data)
