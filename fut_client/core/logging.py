"""Client logging: per-call context, secret redaction and JSON records.

Every ``Client.api()`` call binds a call context (request id, url and
semantic method) that ``CallContextFilter`` copies onto each record logged
while the call runs, including records from the limiter.

The library never touches the root logger. ``configure_logging`` attaches a
handler to the ``fut_client`` logger only, for applications that want the
client's records on their own.
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging import LogRecord
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterable, Mapping

from fut_client.core.config import LogSettings, settings

LOGGER_NAME = "fut_client"
REDACTED = "[REDACTED]"

CallContext = dict[str, str]

_call_context_var: ContextVar[CallContext | None] = ContextVar("fut_call_context", default=None)

# Credentials, cookies and session tokens the remote API hands out
SENSITIVE_KEYS_DEFAULT: frozenset[str] = frozenset(
    {
        "identity",
        "secret",
        "password",
        "token",
        "authorization",
        "cookie",
        "cookies",
        "set-cookie",
        "jar",
        "x-ut-sid",
        "x-ut-phishing-token",
        "two_factor_code",
        "challenge_token",
        "proxy",
    }
)

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

# Call fields emitted right after the record header, in this order
_CALL_FIELDS = ("request_id", "method_override", "url")


def bind_call_context(*, request_id: str, url: str, method_override: str) -> Token:
    """Bind the context of one API call; pass the token to ``reset_call_context``."""
    return _call_context_var.set(
        {"request_id": request_id, "url": url, "method_override": method_override}
    )


def reset_call_context(token: Token) -> None:
    _call_context_var.reset(token)


def get_call_context() -> CallContext:
    """Return a copy of the current call context (empty outside a call)."""
    return dict(_call_context_var.get() or {})


def redact(value: Any, sensitive_keys: Iterable[str] = SENSITIVE_KEYS_DEFAULT) -> Any:
    """Replace values stored under sensitive keys, at any nesting depth.

    Examples:
        >>> redact({"headers": {"X-UT-SID": "abc", "Accept": "json"}})
        {'headers': {'X-UT-SID': '[REDACTED]', 'Accept': 'json'}}
    """
    keys = sensitive_keys if isinstance(sensitive_keys, frozenset) else frozenset(sensitive_keys)
    if isinstance(value, Mapping):
        return {
            k: REDACTED if str(k).lower() in keys else redact(v, keys)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact(v, keys) for v in value)
    return value


def record_extras(record: LogRecord) -> dict[str, Any]:
    """Return the fields a record received through ``extra=``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class CallContextFilter(logging.Filter):
    """Copy the bound call context onto records that do not set it themselves."""

    def filter(self, record: LogRecord) -> bool:
        for key, value in get_call_context().items():
            if getattr(record, key, None) is None:
                setattr(record, key, value)
        return True


class SensitiveDataFilter(logging.Filter):
    """Redact sensitive extras on the record before any formatter sees them."""

    def __init__(self, sensitive_keys: Iterable[str] | None = None) -> None:
        super().__init__()
        self.sensitive_keys = frozenset(k.lower() for k in (sensitive_keys or SENSITIVE_KEYS_DEFAULT))

    def filter(self, record: LogRecord) -> bool:
        for key, value in record_extras(record).items():
            if key.lower() in self.sensitive_keys:
                setattr(record, key, REDACTED)
            else:
                setattr(record, key, redact(value, self.sensitive_keys))
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record: header, call fields, then the extras."""

    def __init__(self, *, ensure_ascii: bool = True) -> None:
        super().__init__()
        self.ensure_ascii = ensure_ascii

    def format(self, record: LogRecord) -> str:
        extras = record_extras(record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key in _CALL_FIELDS:
            if extras.get(key) is not None:
                payload[key] = extras.pop(key)
        payload.update(extras)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, ensure_ascii=self.ensure_ascii)


def _build_handler(log_settings: LogSettings) -> logging.Handler:
    if log_settings.output.lower() != "file":
        return logging.StreamHandler(sys.stdout)

    file_path = Path(log_settings.file_path or "logs/fut_client.log")
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if not log_settings.max_bytes:
        return logging.FileHandler(file_path, encoding="utf-8")
    return RotatingFileHandler(
        file_path,
        maxBytes=log_settings.max_bytes,
        backupCount=log_settings.backup_count,
        encoding="utf-8",
    )


def configure_logging(log_settings: LogSettings | None = None) -> logging.Logger:
    """Route the client's records to a dedicated handler.

    Replaces any handler a previous call installed, and stops the records
    from propagating to the root logger so they are not emitted twice.

    Args:
        log_settings: Log settings; defaults to the environment-driven ones.

    Returns:
        The configured ``fut_client`` logger.
    """
    cfg = log_settings or settings.log

    handler = _build_handler(cfg)
    handler.addFilter(CallContextFilter())
    handler.addFilter(SensitiveDataFilter())
    if cfg.format.lower() == "plain":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, cfg.level.upper(), logging.INFO))
    logger.propagate = False
    return logger
