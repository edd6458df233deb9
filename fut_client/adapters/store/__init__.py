"""Credential store adapters.

The client only needs two operations, load and save, keyed by a string.
Embedding applications either pass plain callables (wrapped by
``CallbackCredentialStore``) or a full ``AbstractCredentialStore``.
"""

from fut_client.adapters.store.base import (
    COOKIE_KEY,
    DEFAULTS_KEY,
    AbstractCredentialStore,
)
from fut_client.adapters.store.callbacks import CallbackCredentialStore
from fut_client.adapters.store.in_memory import InMemoryCredentialStore

__all__ = [
    "AbstractCredentialStore",
    "CallbackCredentialStore",
    "InMemoryCredentialStore",
    "COOKIE_KEY",
    "DEFAULTS_KEY",
]
