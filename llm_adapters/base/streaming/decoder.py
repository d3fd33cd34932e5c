"""Stream decoder contract.

A decoder turns the SSE events of one vendor stream into canonical chunks.
It owns the per-stream state (including its :class:`ToolCallAccumulator`),
is created for exactly one streaming call and is not reusable.

Lifecycle driven by :class:`~llm_adapters.base.streaming.BaseStreamingAdapter`:

1. ``feed(event)`` for every event in wire order; returns zero or more
   content chunks.
2. After ``done`` becomes true (vendor closing event) or the body ends,
   ``finish()`` once; returns the single usage-bearing terminal chunk.
"""
from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..http.sse import ServerSentEvent
from ..models import ChatCompletionChunk


@runtime_checkable
class StreamDecoder(Protocol):
    """Vendor stream state machine."""

    @property
    def done(self) -> bool:
        """Whether the vendor's closing event has been seen."""
        ...

    def feed(self, event: ServerSentEvent) -> List[ChatCompletionChunk]:
        """Consume one event and return the content chunks it produces."""
        ...

    def finish(self) -> ChatCompletionChunk:
        """Return the terminal usage chunk; callable once."""
        ...


__all__ = ["StreamDecoder"]
