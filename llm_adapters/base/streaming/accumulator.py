"""Tool-call delta accumulator.

Tracks tool invocations whose JSON arguments arrive as text fragments spread
over many stream events. Blocks are keyed by the vendor's block index (the
content block index for Anthropic, the ``tool_calls[].index`` for
OpenAI-compatible streams). Each opened block also receives an *ordinal*,
its position among the tool calls of the response, which becomes the
canonical ``ToolCallDelta.index``.

Fragments are concatenated in arrival order. Whether the concatenation is
valid JSON is only known at :meth:`ToolCallAccumulator.close`; partial text
never leaves this class except as the deltas the decoder emits.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import ProtocolError
from ..models import ToolCall


@dataclass
class OpenToolCall:
    """A tool call whose arguments are still arriving."""

    id: str
    name: str
    ordinal: int
    fragments: List[str] = field(default_factory=list)

    def arguments(self) -> str:
        return "".join(self.fragments)


class ToolCallAccumulator:
    """Per-stream registry of open and completed tool calls.

    One instance belongs to exactly one stream decode; it is never shared.
    """

    def __init__(self, *, provider: str = "unknown", model: Optional[str] = None) -> None:
        self._provider = provider
        self._model = model
        self._open: Dict[int, OpenToolCall] = {}
        self._completed: List[ToolCall] = []
        self._next_ordinal = 0

    def _error(self, message: str) -> ProtocolError:
        return ProtocolError(message=message, provider=self._provider, model=self._model)

    def open(self, block_index: int, id: str, name: str) -> OpenToolCall:
        """Start tracking the tool call carried by ``block_index``."""
        if block_index in self._open:
            raise self._error(f"tool call block {block_index} opened twice")
        call = OpenToolCall(id=id, name=name, ordinal=self._next_ordinal)
        self._next_ordinal += 1
        self._open[block_index] = call
        return call

    def is_open(self, block_index: int) -> bool:
        return block_index in self._open

    def get(self, block_index: int) -> Optional[OpenToolCall]:
        return self._open.get(block_index)

    def append(self, block_index: int, fragment: str) -> OpenToolCall:
        """Append an argument fragment to the open call at ``block_index``.

        Raises:
            ProtocolError: No tool call is open for ``block_index``.
        """
        call = self._open.get(block_index)
        if call is None:
            raise self._error(f"tool call arguments for block {block_index} with no open tool call")
        call.fragments.append(fragment)
        return call

    def close(self, block_index: int) -> ToolCall:
        """Finish the call at ``block_index`` and return it.

        Empty arguments become ``"{}"`` (a tool invoked without input).

        Raises:
            ProtocolError: No call is open, or the arguments are not JSON.
        """
        call = self._open.pop(block_index, None)
        if call is None:
            raise self._error(f"tool call block {block_index} closed but never opened")
        arguments = call.arguments() or "{}"
        try:
            json.loads(arguments)
        except ValueError as exc:
            raise self._error(f"tool call {call.id} arguments are not valid JSON: {exc}") from exc
        completed = ToolCall(id=call.id, name=call.name, arguments=arguments)
        self._completed.append(completed)
        return completed

    def close_all(self) -> List[ToolCall]:
        """Close every still-open call in ordinal order."""
        pending = sorted(self._open.items(), key=lambda item: item[1].ordinal)
        return [self.close(index) for index, _ in pending]

    @property
    def completed(self) -> List[ToolCall]:
        """Completed tool calls in completion order."""
        return list(self._completed)

    @property
    def has_open(self) -> bool:
        return bool(self._open)


__all__ = ["ToolCallAccumulator", "OpenToolCall"]
