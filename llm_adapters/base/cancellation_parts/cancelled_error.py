"""Cancellation error type.

Defines ``CancelledError``, raised by ``CancellationToken.raise_if_cancelled``.
Adapters translate it: before a vendor response exists it becomes a
``TransportError`` with code ``cancelled``; once a stream is flowing it ends
the stream quietly.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cooperative cancellation request."""


__all__ = ["CancelledError"]
