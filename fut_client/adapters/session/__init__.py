"""Session adapters: how an authenticated session is established."""

from fut_client.adapters.session.base import (
    AbstractSessionProvider,
    LoginHandshake,
    LoginResult,
    PersistedState,
    Session,
    TransportResponse,
)
from fut_client.adapters.session.factory import create_session_provider
from fut_client.adapters.session.interactive import InteractiveSessionProvider
from fut_client.adapters.session.restore import CachedSessionProvider

__all__ = [
    "AbstractSessionProvider",
    "CachedSessionProvider",
    "InteractiveSessionProvider",
    "LoginHandshake",
    "LoginResult",
    "PersistedState",
    "Session",
    "TransportResponse",
    "create_session_provider",
]
