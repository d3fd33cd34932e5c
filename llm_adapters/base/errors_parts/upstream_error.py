"""Non-success HTTP status reported by a vendor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class UpstreamError(ProviderError):
    """Vendor returned a non-success status or an in-stream error event.

    Attributes:
        status_code: HTTP status of the vendor response; ``None`` for errors
            delivered as stream events after a 200 response.
    """

    code: ErrorCode = ErrorCode.UPSTREAM
    status_code: Optional[int] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = self.status_code if self.status_code is not None else "-"
        return f"{self.provider}:{self.model or '-'} {self.code.value} [{status}]: {self.message}"


__all__ = ["UpstreamError"]
