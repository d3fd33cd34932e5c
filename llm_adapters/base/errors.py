"""Canonical adapter error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``llm_adapters.base.errors_parts`` to keep a stable import path.

Taxonomy
--------
- ``ValidationError``: malformed canonical request, raised before any I/O.
- ``TransportError``: DNS/connect/TLS/timeout failure or setup cancellation.
- ``UpstreamError``: non-success vendor status or in-stream vendor error.
- ``ProtocolError``: vendor bytes that violate the expected wire protocol.
- ``UnsupportedOperationError``: contract method the provider lacks.
- ``UnsupportedProviderError``: factory lookup miss.
"""

from .errors_parts import (
    ErrorCode,
    ProviderError,
    ValidationError,
    TransportError,
    UpstreamError,
    ProtocolError,
    UnsupportedOperationError,
    UnsupportedProviderError,
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
