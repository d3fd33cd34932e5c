"""
Normalized adapter error codes (taxonomy).

Defines the `ErrorCode` enumeration carried by every `ProviderError`. Values
are lowercase snake_case and are a stable public contract for logging and
caller-side retry decisions.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    PROTOCOL = "protocol"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
