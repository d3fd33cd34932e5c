"""Raised by the factory for identifiers missing from the registry."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class UnsupportedProviderError(ProviderError):
    """No client is registered under the requested provider identifier.

    Also raised when a registered entry cannot be imported or constructed.
    """

    code: ErrorCode = ErrorCode.UNSUPPORTED


__all__ = ["UnsupportedProviderError"]
