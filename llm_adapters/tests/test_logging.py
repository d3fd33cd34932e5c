"""Focused tests for llm_adapters.base.logging.

Covers:
- _parse_level string parsing
- _tokens_payload stability
- normalized_log_event emits the required keys and never lets extras
  overwrite them
- JsonFormatter hoists JSON message keys
- configure_logger level and managed file handler
"""
from __future__ import annotations

import json
import logging

from llm_adapters.base.log_support import JsonFormatter, LogContext
from llm_adapters.base.logging import (
    BASE_LOGGER_NAME,
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    _tokens_payload,  # type: ignore[attr-defined]
    close_managed_handlers,
    configure_logger,
    get_logger,
    normalized_log_event,
)
from llm_adapters.base.models import Usage


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_tokens_payload_accepts_usage_and_mappings():
    assert _tokens_payload(None) is None  # nosec B101
    assert _tokens_payload({"prompt": 1}) == {"prompt": 1}  # nosec B101
    assert _tokens_payload(Usage(prompt_tokens=2, completion_tokens=1))["total_tokens"] == 3  # nosec B101


def test_get_logger_prefixes_namespace():
    logger = get_logger("adapters.test")
    assert logger.name == f"{BASE_LOGGER_NAME}.adapters.test"  # nosec B101
    assert logger.propagate  # nosec B101


def test_normalized_log_event_emits_required_keys(log_capture):
    logger = get_logger("adapters.test.logging")
    ctx = LogContext(provider="p", model="m", operation="chat")
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=None,
        error_code="timeout",
        emitted=3,
        tokens={"prompt": 10, "completion": 5},
        metrics={"time_to_first_token_ms": 12.3},
    )
    payload = json.loads(log_capture[-1].getMessage())
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["event"] == "stream.end"  # nosec B101
    assert payload["provider"] == "p" and payload["model"] == "m"  # nosec B101
    assert payload["operation"] == "chat" and "endpoint" not in payload  # nosec B101
    assert payload["attempt"] is None  # nosec B101
    assert payload["metrics"]["time_to_first_token_ms"] == 12.3  # nosec B101


def test_structured_flag_and_none_extras(log_capture):
    logger = get_logger("adapters.test.logging")
    normalized_log_event(logger, "chat.end", None, phase="finalize", emitted=1, structured=False, note=None)
    payload = json.loads(log_capture[-1].getMessage())
    assert payload["structured"] is False  # nosec B101
    assert payload["emitted"] == 1  # nosec B101
    assert payload["tokens"] is None  # nosec B101
    assert "note" not in payload  # nosec B101


def test_json_formatter_hoists_message_keys():
    formatter = JsonFormatter()
    record = logging.LogRecord("x", logging.INFO, __file__, 1, json.dumps({"event": "chat.start", "a": 1}), None, None)
    data = json.loads(formatter.format(record))
    assert data["event"] == "chat.start"  # nosec B101
    assert data["a"] == 1  # nosec B101
    assert data["level"] == "INFO"  # nosec B101


def test_configure_logger_level_and_file(tmp_path):
    target = tmp_path / "logs" / "adapters.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        assert logger.level == logging.DEBUG  # nosec B101
        get_logger("adapters.test.file").debug("hello file")
        for handler in logger.handlers:
            handler.flush()
        assert target.exists()  # nosec B101
        assert "hello file" in target.read_text(encoding="utf-8")  # nosec B101
    finally:
        configure_logger(level="INFO", file_path=None)
        close_managed_handlers()
