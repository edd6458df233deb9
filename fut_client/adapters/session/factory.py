"""Factory for session providers."""

from __future__ import annotations

import httpx

from fut_client.adapters.session.base import AbstractSessionProvider, LoginHandshake
from fut_client.adapters.session.interactive import InteractiveSessionProvider
from fut_client.adapters.session.restore import CachedSessionProvider
from fut_client.core.errors import ConfigurationError

SUPPORTED_VARIANTS = ("interactive", "restore")


def create_session_provider(
    variant: str,
    *,
    handshake: LoginHandshake | None = None,
    proxy: str | None = None,
    timeout_seconds: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AbstractSessionProvider:
    """Select the session provider once, at client construction time.

    Args:
        variant: "interactive" or "restore".
        handshake: Login handshake, required for the interactive variant.
        proxy: Optional proxy override applied to the session.
        timeout_seconds: Transport timeout.
        transport: Optional httpx transport (tests, custom connection pools).

    Returns:
        AbstractSessionProvider: The provider for ``variant``.

    Raises:
        ConfigurationError: If the variant is unknown or its requirements are not met.
    """
    normalized = variant.lower()

    if normalized == "interactive":
        if handshake is None:
            raise ConfigurationError(
                code="missing_login_handshake",
                message="Interactive login requires a LoginHandshake implementation",
                details={"variant": normalized},
            )
        return InteractiveSessionProvider(
            handshake,
            proxy=proxy,
            timeout_seconds=timeout_seconds,
            transport=transport,
        )

    if normalized == "restore":
        return CachedSessionProvider(proxy=proxy, transport=transport)

    raise ConfigurationError(
        code="unknown_login_variant",
        message=(
            f"Unknown login variant: '{variant}'. "
            f"Supported variants: {', '.join(SUPPORTED_VARIANTS)}"
        ),
        details={"variant": variant},
    )
