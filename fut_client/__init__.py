"""Authenticated, rate-limited client for the FUT web API."""

from fut_client.adapters.session.base import LoginHandshake
from fut_client.adapters.store import (
    AbstractCredentialStore,
    CallbackCredentialStore,
    InMemoryCredentialStore,
)
from fut_client.core.config import ClientSettings
from fut_client.core.errors import (
    AppError,
    ApplicationError,
    ConfigurationError,
    MissingCacheError,
    NotReadyError,
    TransportError,
)
from fut_client.core.logging import configure_logging
from fut_client.schemas.session import Credentials, SessionDefaults
from fut_client.services.client import Client
from fut_client.utils.pricing import (
    calculate_next_higher_price,
    calculate_next_lower_price,
    calculate_valid_price,
    get_base_id,
    is_price_valid,
)

__all__ = [
    "AbstractCredentialStore",
    "AppError",
    "ApplicationError",
    "CallbackCredentialStore",
    "Client",
    "ClientSettings",
    "ConfigurationError",
    "Credentials",
    "InMemoryCredentialStore",
    "LoginHandshake",
    "MissingCacheError",
    "NotReadyError",
    "SessionDefaults",
    "TransportError",
    "calculate_next_higher_price",
    "calculate_next_lower_price",
    "calculate_valid_price",
    "configure_logging",
    "get_base_id",
    "is_price_valid",
]
