"""Tests for structured (JSON) logging output and request-context injection."""

from __future__ import annotations

import json
import logging
import sys

from app.core.logging import (
    _ContainerFormatter,
    _JsonFormatter,
    _RequestContextFilter,
    request_id_var,
)


def _record(msg: str = "test message", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="app.services.credential_registry",
        level=level,
        pathname="credential_registry.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_produces_valid_json() -> None:
    formatter = _JsonFormatter()
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg="Issued credential id=%d",
        args=(7,),
        exc_info=None,
    )
    parsed = json.loads(formatter.format(record))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "test.logger"
    assert parsed["message"] == "Issued credential id=7"
    assert "timestamp" in parsed


def test_json_formatter_includes_context_fields() -> None:
    record = _record()
    record.request_id = "abc-123"  # type: ignore[attr-defined]
    record.method = "POST"  # type: ignore[attr-defined]
    record.path = "/v1/credentials"  # type: ignore[attr-defined]
    record.duration_ms = 1.5  # type: ignore[attr-defined]
    record.credential_id = 3  # type: ignore[attr-defined]

    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "abc-123"
    assert parsed["method"] == "POST"
    assert parsed["path"] == "/v1/credentials"
    assert parsed["duration_ms"] == 1.5
    assert parsed["credential_id"] == 3


def test_json_formatter_drops_placeholder_request_id() -> None:
    record = _record()
    record.request_id = "-"  # type: ignore[attr-defined]
    parsed = json.loads(_JsonFormatter().format(record))
    assert "request_id" not in parsed


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise ValueError("test error")
    except ValueError:
        record = _record(level=logging.ERROR)
        record.exc_info = sys.exc_info()
        output = _JsonFormatter().format(record)

    parsed = json.loads(output)
    assert "ValueError: test error" in parsed["exception"]


def test_context_filter_copies_current_request_id() -> None:
    token = request_id_var.set("req-42")
    try:
        record = _record()
        assert _RequestContextFilter().filter(record) is True
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-42"  # type: ignore[attr-defined]


def test_context_filter_keeps_explicit_request_id() -> None:
    record = _record()
    record.request_id = "from-extra"  # type: ignore[attr-defined]
    _RequestContextFilter().filter(record)
    assert record.request_id == "from-extra"  # type: ignore[attr-defined]


def test_context_filter_outside_request_uses_placeholder() -> None:
    record = _record()
    _RequestContextFilter().filter(record)
    assert record.request_id == "-"  # type: ignore[attr-defined]


def test_container_formatter_is_not_json() -> None:
    output = _ContainerFormatter().format(_record("server started"))
    assert "INFO" in output
    assert "app.services.credential_registry" in output
    assert "server started" in output
    try:
        json.loads(output)
        raise AssertionError("Container format should not be valid JSON")
    except json.JSONDecodeError:
        pass
