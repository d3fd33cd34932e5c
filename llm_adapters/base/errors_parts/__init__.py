"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `llm_adapters.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .validation_error import ValidationError
from .transport_error import TransportError
from .upstream_error import UpstreamError
from .protocol_error import ProtocolError
from .unsupported_operation_error import UnsupportedOperationError
from .unsupported_provider_error import UnsupportedProviderError
from .classification import (
    classify_exception,
    classify_status,
    extract_error_message,
    raise_for_upstream,
    transport_error_from,
    is_retryable_code,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ValidationError",
    "TransportError",
    "UpstreamError",
    "ProtocolError",
    "UnsupportedOperationError",
    "UnsupportedProviderError",
    "classify_exception",
    "classify_status",
    "extract_error_message",
    "raise_for_upstream",
    "transport_error_from",
    "is_retryable_code",
]
