"""
Canonical streaming unit.

A stream is a sequence of `ChatCompletionChunk` objects. Content chunks carry
a text ``delta`` and/or ``tool_calls`` fragments. The last chunk of every
stream is the terminal chunk: it carries ``usage`` and no content.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tool_call_delta import ToolCallDelta
from .usage import Usage


@dataclass
class ChatCompletionChunk:
    """One incremental piece of a streamed reply."""

    model: str
    delta: Optional[str] = None
    tool_calls: List[ToolCallDelta] = field(default_factory=list)
    usage: Optional[Usage] = None
    finish_reason: Optional[str] = None
    id: str = ""
    created: int = field(default_factory=lambda: int(time.time()))

    @property
    def is_terminal(self) -> bool:  # noqa: D401 - short property
        """Whether this is the usage-bearing terminal chunk."""
        return self.usage is not None

    def has_content(self) -> bool:
        return bool(self.delta) or bool(self.tool_calls)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI ``chat.completion.chunk`` object shape."""
        delta: Dict[str, Any] = {}
        if self.delta is not None:
            delta["role"] = "assistant"
            delta["content"] = self.delta
        if self.tool_calls:
            delta["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        choices: List[Dict[str, Any]] = []
        if delta or self.finish_reason is not None:
            choices.append({"index": 0, "delta": delta, "finish_reason": self.finish_reason})
        out: Dict[str, Any] = {
            "id": self.id,
            "object": "chat.completion.chunk",
            "created": self.created,
            "model": self.model,
            "choices": choices,
        }
        if self.usage is not None:
            out["usage"] = self.usage.to_dict()
        return out


__all__ = ["ChatCompletionChunk"]
