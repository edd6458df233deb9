"""Tests for sensitive data filtering and call correlation in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from fut_client.core.config import LogSettings
from fut_client.core.logging import (
    LOGGER_NAME,
    CallContextFilter,
    JsonFormatter,
    SensitiveDataFilter,
    bind_call_context,
    configure_logging,
    get_call_context,
    redact,
    reset_call_context,
)


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(CallContextFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


@pytest.fixture
def package_logger():
    """Restore the package logger after configure_logging touched it."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_sensitive_filter_redacts_credentials():
    """Ensure secrets and identities never reach the output."""

    logger, stream = _capture("test_credentials")

    logger.info(
        "login_event",
        extra={
            "identity": "player@example.com",
            "secret": "s3cret",
            "platform": "ps",
        },
    )

    record = json.loads(stream.getvalue())

    assert record["identity"] == "[REDACTED]"
    assert record["secret"] == "[REDACTED]"
    assert record["platform"] == "ps"


def test_sensitive_filter_redacts_nested_session_headers():
    logger, stream = _capture("test_nested")

    logger.info(
        "session_event",
        extra={
            "headers": {
                "X-UT-SID": "sid-secret",
                "User-Agent": "pytest",
            },
            "cookies": [{"name": "remember", "value": "device-token"}],
        },
    )

    output = stream.getvalue()

    assert "sid-secret" not in output
    assert "device-token" not in output
    assert "pytest" in output


def test_redact_walks_lists_and_keeps_types():
    value = {"calls": ({"Authorization": "Bearer x", "url": "/a"},)}

    assert redact(value) == {"calls": ({"Authorization": "[REDACTED]", "url": "/a"},)}


def test_record_has_event_header_and_safe_extras():
    logger, stream = _capture("test_safe_fields")

    logger.info("api.dispatch", extra={"status": 200, "duration_ms": 150.5})

    record = json.loads(stream.getvalue())

    assert record["event"] == "api.dispatch"
    assert record["logger"] == "test_safe_fields"
    assert record["level"] == "info"
    assert record["status"] == 200
    assert "[REDACTED]" not in stream.getvalue()


def test_call_context_is_attached_and_reset():
    logger, stream = _capture("test_call_context")

    token = bind_call_context(request_id="call-123", url="/user/credits", method_override="GET")
    try:
        logger.info("rate_limit.wait")
    finally:
        reset_call_context(token)
    logger.info("after")

    first, second = (json.loads(line) for line in stream.getvalue().splitlines())
    assert first["request_id"] == "call-123"
    assert first["url"] == "/user/credits"
    assert first["method_override"] == "GET"
    assert list(first)[4:7] == ["request_id", "method_override", "url"]
    assert "request_id" not in second
    assert get_call_context() == {}


def test_explicit_extra_wins_over_call_context():
    logger, stream = _capture("test_explicit_extra")

    token = bind_call_context(request_id="call-1", url="/a", method_override="GET")
    try:
        logger.info("api.dispatch", extra={"url": "/b"})
    finally:
        reset_call_context(token)

    assert json.loads(stream.getvalue())["url"] == "/b"


def test_configure_logging_targets_package_logger_only(package_logger):
    root = logging.getLogger()
    root_handlers = root.handlers[:]

    logger = configure_logging(LogSettings(level="debug", format="plain"))

    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0].formatter, JsonFormatter)
    assert root.handlers == root_handlers


def test_configure_logging_rotating_file(package_logger, tmp_path):
    log_file = tmp_path / "logs" / "client.log"

    logger = configure_logging(
        LogSettings(output="file", file_path=str(log_file), max_bytes=1024, backup_count=2)
    )
    logging.getLogger("fut_client.services.client").info("client.ready", extra={"secret": "s3cret"})
    logger.handlers[0].flush()

    record = json.loads(log_file.read_text().splitlines()[0])
    assert record["event"] == "client.ready"
    assert record["secret"] == "[REDACTED]"
    assert logger.handlers[0].maxBytes == 1024
    logger.handlers[0].close()
