"""
Canonical non-streaming chat completion response.

``to_dict`` produces the OpenAI ``chat.completion`` object shape so callers
that already speak that format can forward the result unchanged.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tool_call import ToolCall
from .usage import Usage


@dataclass
class ChatCompletion:
    """Single assistant reply with usage.

    Attributes:
        model: Model id reported by the vendor (or requested).
        content: Assistant text; ``None`` when the reply only calls tools.
        tool_calls: Completed tool calls in emission order.
        finish_reason: ``stop``, ``length``, ``tool_calls`` or ``None``.
        usage: Canonical token accounting.
        id: Vendor response id when available.
        created: Unix timestamp.
    """

    model: str
    content: Optional[str] = None
    tool_calls: List[ToolCall] = field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Usage = field(default_factory=Usage)
    id: str = ""
    created: int = field(default_factory=lambda: int(time.time()))

    @classmethod
    def empty(cls, model: str) -> "ChatCompletion":
        """Return the quiet empty response used for caller-aborted requests."""
        return cls(model=model, content="", finish_reason=None)

    def to_dict(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": "assistant", "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        return {
            "id": self.id,
            "object": "chat.completion",
            "created": self.created,
            "model": self.model,
            "choices": [{"index": 0, "message": message, "finish_reason": self.finish_reason}],
            "usage": self.usage.to_dict(),
        }


__all__ = ["ChatCompletion"]
