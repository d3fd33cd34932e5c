"""Per-call fields attached to every adapter log event.

``LogContext`` identifies which vendor, model and contract operation an event
belongs to, plus the endpoint path when a request goes over HTTP. ``None``
values are left out of the payload.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogContext:
    provider: Optional[str] = None
    model: Optional[str] = None
    operation: Optional[str] = None
    endpoint: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        fields_ = {
            "provider": self.provider,
            "model": self.model,
            "operation": self.operation,
            "endpoint": self.endpoint,
            **self.extra,
        }
        return {k: v for k, v in fields_.items() if v is not None}


__all__ = ["LogContext"]
