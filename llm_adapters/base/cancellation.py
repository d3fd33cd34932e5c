"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the stable
``llm_adapters.base.cancellation`` import path; implementations live under
``cancellation_parts``.

Notes
-----
- Callers pass a ``CancellationToken`` to any client operation.
- Cancelling closes the underlying HTTP response through ``on_cancel``
  callbacks registered by the adapter, then the stream ends without error.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
