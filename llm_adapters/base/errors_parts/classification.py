"""
Error classification helpers mapping failures to the canonical taxonomy.

Implements HTTP status extraction, status-to-code mapping, vendor error body
parsing and ``httpx`` exception translation. Adapters call
:func:`raise_for_upstream` on every vendor response and wrap transport calls
with :func:`transport_error_from` so the caller only ever sees
``ProviderError`` subclasses.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError
from .transport_error import TransportError
from .upstream_error import UpstreamError


def _valid_status(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value < 600 else None


def _extract_status(exc: Exception) -> Optional[int]:
    """Find an HTTP status on ``exc``.

    Looks at ``status_code``, then ``status``, then ``response.status_code``.
    """
    for candidate in (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    ):
        status = _valid_status(candidate)
        if status is not None:
            return status
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.VALIDATION,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}

_RETRYABLE_CODES = frozenset(
    {
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.UNAVAILABLE,
        ErrorCode.SERVER_ERROR,
    }
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without a status."""
    pattern_groups = (
        (ErrorCode.TIMEOUT, ("timeout", "timed out")),
        (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden")),
        (ErrorCode.UNSUPPORTED, ("unsupported", "not supported")),
        (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
        (ErrorCode.UNAVAILABLE, ("unavailable", "overloaded")),
        (ErrorCode.VALIDATION, ("invalid", "malformed")),
    )
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in pattern_groups:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: Exception) -> ErrorCode:
    """Map an arbitrary exception onto :class:`ErrorCode`.

    A ``ProviderError`` keeps its own code and timeouts win over everything
    else. After that an HTTP status found on the exception is looked up, and
    the message text is the last resort before ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    mapped = _HTTP_STATUS_MAP.get(_extract_status(exc) or 0)
    if mapped is not None:
        return mapped
    return _heuristic_from_message(str(exc).lower()) or ErrorCode.UNKNOWN


def is_retryable_code(code: ErrorCode) -> bool:
    """Whether a failure with ``code`` is worth retrying by the caller."""
    return code in _RETRYABLE_CODES


def classify_status(status: int) -> ErrorCode:
    """Map an HTTP status to an :class:`ErrorCode` (``UPSTREAM`` if unmapped)."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UPSTREAM


def extract_error_message(body: Any, fallback: str) -> str:
    """Pull the vendor-reported message out of a parsed error body.

    Handles ``{"error": {"message": ...}}`` (both Anthropic and OpenAI
    shapes), ``{"error": "..."}``, and ``{"message": ...}``. Any other JSON
    value is re-serialized so no detail is lost.
    """
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and isinstance(err.get("message"), str):
            return err["message"]
        if isinstance(err, str) and err:
            return err
        if isinstance(body.get("message"), str):
            return body["message"]
        if isinstance(body.get("detail"), str):
            return body["detail"]
    if body is None:
        return fallback
    return json.dumps(body, ensure_ascii=False)


def raise_for_upstream(
    response: httpx.Response,
    *,
    provider: str,
    model: Optional[str] = None,
) -> None:
    """Raise :class:`UpstreamError` when ``response`` is not a success status.

    The body is read (streamed responses included), parsed as JSON when
    possible, otherwise the raw text becomes the message.
    """
    if response.is_success:
        return
    response.read()
    text = response.text
    try:
        body: Any = json.loads(text) if text else None
    except ValueError:
        body = None
    message = extract_error_message(body, text or response.reason_phrase or "")
    code = classify_status(response.status_code)
    raise UpstreamError(
        message=message,
        provider=provider,
        model=model,
        code=code,
        retryable=is_retryable_code(code),
        raw=body if body is not None else text,
        status_code=response.status_code,
    )


def transport_error_from(
    exc: Exception,
    *,
    provider: str,
    model: Optional[str] = None,
) -> TransportError:
    """Wrap an ``httpx`` transport or stream exception in a :class:`TransportError`."""
    code = ErrorCode.TIMEOUT if isinstance(exc, httpx.TimeoutException) else ErrorCode.TRANSPORT
    return TransportError(
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        code=code,
        raw=exc,
    )


__all__ = [
    "classify_exception",
    "classify_status",
    "is_retryable_code",
    "extract_error_message",
    "raise_for_upstream",
    "transport_error_from",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
