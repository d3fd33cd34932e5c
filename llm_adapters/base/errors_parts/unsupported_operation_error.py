"""Contract method not implemented by the selected provider."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class UnsupportedOperationError(ProviderError):
    """The provider does not implement the requested client operation."""

    code: ErrorCode = ErrorCode.UNSUPPORTED


__all__ = ["UnsupportedOperationError"]
