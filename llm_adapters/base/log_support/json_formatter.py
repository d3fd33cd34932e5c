"""JSON logging formatter used by the adapter logging setup.

This module defines :class:`JsonFormatter`, a minimal JSON formatter that
serializes standard logging fields, hoists keys from JSON-encoded messages
to the top level, and merges non-internal extra attributes from the
``LogRecord``.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# LogRecord attributes never copied into the payload.
_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs.

    The output always has ``ts``, ``level`` and ``logger``. When the message
    itself is a JSON object (as produced by ``log_event``) its keys are merged
    into the top level instead of being double-encoded under ``msg``.
    """

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial formatting
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        parsed = None
        if msg_text.startswith("{"):
            try:
                parsed = json.loads(msg_text)
            except ValueError:
                parsed = None
        if isinstance(parsed, dict):
            base.update(parsed)
        else:
            base["msg"] = msg_text
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RESERVED:
                continue
            if k not in base:
                base[k] = v
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
