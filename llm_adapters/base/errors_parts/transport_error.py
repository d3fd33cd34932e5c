"""Transport level failure (DNS, connect, TLS, timeout, setup cancellation)."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class TransportError(ProviderError):
    """The HTTP exchange failed before a vendor status was received.

    ``code`` is refined to ``TIMEOUT`` for timeouts and ``CANCELLED`` when the
    caller cancelled while the request was still being set up.
    """

    code: ErrorCode = ErrorCode.TRANSPORT
    retryable: bool = True


__all__ = ["TransportError"]
