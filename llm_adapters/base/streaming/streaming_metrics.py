"""Streaming metrics data structures.

Isolated within the streaming package to keep orchestration code small.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import Usage


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single streaming call.

    Attributes:
        emitted: Number of content chunks yielded (terminal chunk excluded).
        time_to_first_token_ms: Latency until the first content chunk.
        total_duration_ms: Latency until the terminal chunk or termination.
        prompt_tokens, completion_tokens, total_tokens: From the terminal usage.
        cancelled: Whether the stream ended because of caller cancellation.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cancelled: bool = False

    def tokens(self) -> Optional[Dict[str, Any]]:
        """Return the ``{"prompt", "completion", "total"}`` mapping for logs."""
        if self.total_tokens is None:
            return None
        return {"prompt": self.prompt_tokens, "completion": self.completion_tokens, "total": self.total_tokens}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emitted": self.emitted,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
            "cancelled": self.cancelled,
        }


def apply_token_usage(metrics: StreamMetrics, usage: Usage) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    metrics.prompt_tokens = usage.prompt_tokens
    metrics.completion_tokens = usage.completion_tokens
    metrics.total_tokens = usage.total_tokens


__all__ = ["StreamMetrics", "apply_token_usage"]
