"""Decode-boundary failure for a vendor stream or payload."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class ProtocolError(ProviderError):
    """Vendor bytes violate the expected wire protocol.

    Raised for unparseable event payloads, tool-call argument fragments with
    no open tool block, or a stream that cannot produce its terminal usage.
    """

    code: ErrorCode = ErrorCode.PROTOCOL


__all__ = ["ProtocolError"]
