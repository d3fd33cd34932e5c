"""Validation failure raised before any network call is made."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class ValidationError(ProviderError):
    """A canonical request is malformed or misses a required field."""

    code: ErrorCode = ErrorCode.VALIDATION


__all__ = ["ValidationError"]
