"""
Structured adapter error exception type.

Root of the canonical error taxonomy. Every failure an adapter surfaces to a
caller is a `ProviderError` (or subclass) carrying a normalized `ErrorCode`,
so callers can branch on the class or on ``code`` without parsing messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured adapter error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"anthropic"``).
        code: Normalized :class:`ErrorCode` classification for the failure.
        model: Optional model name associated with the failure.
        retryable: Hint for caller retry logic (not authoritative).
        raw: Optional original exception or payload for diagnostics.
    """

    message: str
    provider: str = "unknown"
    code: ErrorCode = ErrorCode.UNKNOWN
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[object] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
