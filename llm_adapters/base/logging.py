"""Structured logging utilities for the adapter layer.

Every module obtains its logger through :func:`get_logger`, which returns a
child of the shared ``llm_adapters`` logger. Only the shared logger owns a
handler (stderr, JSON by default); children propagate to it. The level can be
overridden with the ``LLM_ADAPTERS_LOG_LEVEL`` environment variable, which is
read for logging setup only.

``normalized_log_event`` wraps ``log_event`` and guarantees the canonical
structured keys ``structured``, ``phase``, ``attempt``, ``error_code``,
``emitted`` and ``tokens`` on every lifecycle event so that output from
different adapters can be filtered uniformly.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "llm_adapters"
LOG_LEVEL_ENV = "LLM_ADAPTERS_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_llm_adapters_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_llm_adapters_console_handler"
_FILE_HANDLER_ATTR = "_llm_adapters_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_ROTATE_BYTES = 10 * 1024 * 1024
_ROTATE_BACKUPS = 5


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name (any case) to its constant; unknown names give ``default``."""
    if not value:
        return default
    return _LEVEL_NAMES.get(value.strip().upper(), default)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Attach the stderr handler to the shared logger the first time it is requested."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger
    effective = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_make_formatter(json_mode))
    console.setLevel(effective)
    setattr(console, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers = [console]
    logger.setLevel(effective)
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the shared logger or one of its children.

    ``name`` is prefixed with ``llm_adapters.`` when it is not already inside
    the shared namespace, so every adapter logger propagates to one handler.
    """
    root = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return root
    prefix = BASE_LOGGER_NAME + "."
    child = logging.getLogger(name if name.startswith(prefix) else prefix + name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _managed_file_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]


def _detach(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    with contextlib.suppress(OSError):
        handler.close()


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared adapter logger at runtime.

    ``level`` accepts a constant or a name and leaves the level alone when
    ``None``. ``file_path`` attaches a rotating file handler (reused when it
    already targets the same file); ``None`` removes the one attached here
    earlier. Handlers added by callers are left untouched.
    """
    logger = get_logger(json_mode=json_mode)
    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    if file_path is None:
        for handler in _managed_file_handlers(logger):
            _detach(logger, handler)
        return logger

    target = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
    keep: Optional[logging.Handler] = None
    for handler in _managed_file_handlers(logger):
        if keep is None and getattr(handler, "baseFilename", None) == target:
            keep = handler
        else:
            _detach(logger, handler)
    if keep is None:
        keep = RotatingFileHandler(target, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_BACKUPS, encoding="utf-8")
        setattr(keep, _FILE_HANDLER_ATTR, True)
        logger.addHandler(keep)
    keep.setFormatter(_make_formatter(json_mode))
    keep.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``{"event": event, **ctx, **fields}`` as one JSON line; ``None`` fields dropped unless ``keep_none``."""
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "attempt", "error_code", "emitted", "tokens")


def _tokens_payload(tokens: Any) -> Any:
    if tokens is None or isinstance(tokens, dict):
        return tokens
    if isinstance(tokens, Mapping):
        return dict(tokens)
    to_dict = getattr(tokens, "to_dict", None)
    return to_dict() if callable(to_dict) else {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | int | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a lifecycle event carrying the normalized key set.

    Every key of ``REQUIRED_NORMALIZED_KEYS`` is present (``null`` when
    unknown); ``extra_fields`` cannot shadow them and ``None`` extras are
    skipped.
    """
    extras = {k: v for k, v in extra_fields.items() if v is not None and k not in REQUIRED_NORMALIZED_KEYS}
    log_event(
        logger,
        event,
        ctx,
        level=level,
        keep_none=True,
        structured=structured,
        phase=phase,
        attempt=attempt,
        error_code=error_code,
        emitted=emitted,
        tokens=_tokens_payload(tokens),
        **extras,
    )


def close_managed_handlers() -> None:
    """Detach and close every handler this module attached (test teardown)."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    for handler in _managed_file_handlers(logger):
        _detach(logger, handler)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "close_managed_handlers",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
]
