"""Streaming primitives: decoder contract, accumulator, engine and helpers."""

from .accumulator import OpenToolCall, ToolCallAccumulator
from .decoder import StreamDecoder
from .streaming_metrics import StreamMetrics, apply_token_usage
from .streaming_adapter import BaseStreamingAdapter
from .stream_controller import StreamController
from .streaming import accumulate_chunks

__all__ = [
    "OpenToolCall",
    "ToolCallAccumulator",
    "StreamDecoder",
    "StreamMetrics",
    "apply_token_usage",
    "BaseStreamingAdapter",
    "StreamController",
    "accumulate_chunks",
]
