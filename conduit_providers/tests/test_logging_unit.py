"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging

from conduit_providers.base.log_support import JsonFormatter
from conduit_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    _parse_level,  # type: ignore[attr-defined]
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
    redact,
)
from conduit_providers.base.models import Usage


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_get_logger_prefixes_names():
    assert get_logger("swiss-ai").name == "conduit.swiss-ai"  # nosec B101
    assert get_logger("conduit.cli").name == "conduit.cli"  # nosec B101
    assert get_logger().name == "conduit"  # nosec B101


def test_get_logger_env_overrides_level(monkeypatch, log_capture):
    monkeypatch.setenv("CONDUIT_LOG_LEVEL", "ERROR")
    logger = get_logger(name="test.level", level=logging.DEBUG)
    logger.info("hello")
    logger.error("fail")
    assert log_capture.messages == ["fail"]  # nosec B101


def test_redact_masks_credential_fields():
    out = redact({"api_key": "sk-1", "Authorization": "Bearer x", "tokens": {"a": 1}, "token": None, "model": "m"})
    assert out["api_key"] == "***"  # nosec B101
    assert out["Authorization"] == "***"  # nosec B101
    assert out["tokens"] == {"a": 1}  # nosec B101
    assert out["token"] is None  # nosec B101
    assert out["model"] == "m"  # nosec B101


def test_log_event_merges_context_and_drops_none(log_capture):
    logger = get_logger("test.event")
    ctx = LogContext(provider="swiss-ai", model="m", operation="complete", extra={"tenant": "t1"})
    log_event(logger, "chat.start", ctx, messages=2, skipped=None, api_key="sk-secret-value")
    payload = log_capture.events()[-1]
    assert payload["event"] == "chat.start"  # nosec B101
    assert payload["provider"] == "swiss-ai"  # nosec B101
    assert payload["tenant"] == "t1"  # nosec B101
    assert payload["messages"] == 2  # nosec B101
    assert "skipped" not in payload  # nosec B101
    assert payload["api_key"] == "***"  # nosec B101


def test_normalized_log_event_emits_required_keys(log_capture):
    logger = get_logger("test.normalized")
    ctx = LogContext(provider="p", model="m")
    normalized_log_event(
        logger,
        "chat.success",
        ctx,
        phase="finalize",
        emitted=True,
        tokens=Usage(input_tokens=10, output_tokens=5, total_tokens=15),
        latency_ms=12,
        phase_override=None,
    )
    payload = log_capture.events()[-1]
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in payload  # nosec B101
    assert payload["attempt"] is None  # nosec B101
    assert payload["tokens"] == {"input_tokens": 10, "output_tokens": 5, "total_tokens": 15}  # nosec B101
    assert payload["latency_ms"] == 12  # nosec B101
    assert "phase_override" not in payload  # nosec B101


def test_normalized_log_event_extra_does_not_override(log_capture):
    logger = get_logger("test.normalized2")
    normalized_log_event(logger, "retry.attempt", None, phase="chat", attempt=2, error_code="timeout", tokens=[("a", 1)])
    payload = log_capture.events()[-1]
    assert payload["attempt"] == 2  # nosec B101
    assert payload["error_code"] == "timeout"  # nosec B101
    assert payload["tokens"] == {"value": "[('a', 1)]"}  # nosec B101


def test_log_context_helpers():
    ctx = LogContext(provider="p", model=None)
    assert ctx.to_dict() == {"provider": "p"}  # nosec B101
    assert ctx.with_response("r-1").to_dict() == {"provider": "p", "response_id": "r-1"}  # nosec B101


def test_json_formatter_hoists_message_fields():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger = logging.getLogger("test.formatter.isolated")
    logger.handlers[:] = [handler]
    logger.propagate = False
    logger.setLevel(logging.INFO)
    logger.info(json.dumps({"event": "chat.start", "provider": "p"}))
    logger.info("plain text")
    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert lines[0]["event"] == "chat.start"  # nosec B101
    assert lines[0]["level"] == "INFO"  # nosec B101
    assert lines[1]["msg"] == "plain text"  # nosec B101


def test_configure_logger_sets_level(monkeypatch):
    monkeypatch.delenv("CONDUIT_LOG_LEVEL", raising=False)
    logger = configure_logger(level="WARNING", json_mode=False)
    try:
        assert logger.level == logging.WARNING  # nosec B101
    finally:
        configure_logger(level=logging.INFO)
