"""Client configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Callables (persistence hooks, handshake handlers) cannot come from the
environment and are passed to ``Client`` directly.
"""

from __future__ import annotations

import os
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file and not os.getenv("TESTING"):
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_client_settings() -> "ClientSettings":
    """Build client settings from environment.

    Pydantic Settings (v2) populates values from environment variables, so
    the constructor is intentionally called without arguments.
    """

    return ClientSettings()


def _build_log_settings() -> "LogSettings":
    """Build log settings from environment."""

    return LogSettings()


class ClientSettings(BaseSettings):
    """Remote API client configuration.

    Credential fields are optional here so that settings can always be
    built at import time; ``Client`` validates them and raises
    ``ConfigurationError`` when one is missing.
    """

    identity: str | None = Field(
        None,
        description="Account identity used by the login handshake (e.g. e-mail)",
    )
    secret: str | None = Field(
        None,
        description="Account secret used by the login handshake",
    )
    platform: str | None = Field(
        None,
        description="Platform the account plays on (e.g. ps, xbox, pc)",
    )
    login_variant: str = Field(
        "interactive",
        description="Session provider used by login(): interactive or restore",
    )
    requests_per_minute: int = Field(
        10,
        description="Maximum number of throttled API calls per minute",
        ge=1,
    )
    proxy: str | None = Field(
        None,
        description="Optional proxy URL applied to every transport call",
    )
    timeout_seconds: float = Field(
        30.0,
        description="Transport timeout in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="FUT_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(
        "INFO",
        description="Root log level",
    )
    format: str = Field(
        "json",
        description="Log format: json or plain",
    )
    output: str = Field(
        "stdout",
        description="Log destination: stdout or file",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output=file",
    )
    max_bytes: int = Field(
        10_485_760,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    """

    app_env: str = APP_ENV
    client: ClientSettings = Field(default_factory=_build_client_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
