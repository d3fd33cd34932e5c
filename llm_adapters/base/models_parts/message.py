"""
Chat message used by every canonical request.

Defines the `ChatMessage` dataclass and the `Role` literal. Content is either
plain text or an ordered list of `TextPart` / `ImagePart` items. Tool result
messages (``role="tool"``) reference the assistant tool call they answer via
``tool_call_id``; assistant messages that invoked tools carry ``tool_calls``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Union

from .image_part import ImagePart
from .text_part import TextPart
from .tool_call import ToolCall

Role = Literal["system", "user", "assistant", "tool"]
ROLES = ("system", "user", "assistant", "tool")

ContentPart = Union[TextPart, ImagePart]
MessageContent = Union[str, List[ContentPart]]


@dataclass
class ChatMessage:
    """A canonical chat message.

    Attributes:
        role: Author role.
        content: Plain text or a list of typed content parts.
        tool_call_id: For ``role="tool"``, the id of the answered tool call.
        tool_calls: For ``role="assistant"``, the tool calls the model made.
        name: Optional participant name (OpenAI ``name`` field).
    """

    role: Role
    content: MessageContent = ""
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    name: Optional[str] = None

    def is_structured(self) -> bool:
        """Return True if the message content is a list of parts."""
        return isinstance(self.content, list)

    def text(self) -> str:
        """Return the concatenated text of the message, ignoring images."""
        if isinstance(self.content, str):
            return self.content
        return "".join(p.text for p in self.content if isinstance(p, TextPart))

    def parts(self) -> List[ContentPart]:
        """Return content as a list of parts (text content becomes one part)."""
        if isinstance(self.content, str):
            return [TextPart(self.content)]
        return list(self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI chat message shape."""
        out: Dict[str, Any] = {"role": self.role}
        if isinstance(self.content, str):
            out["content"] = self.content
        else:
            out["content"] = [p.to_dict() for p in self.content]
        if self.tool_call_id is not None:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            out["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.name is not None:
            out["name"] = self.name
        return out


__all__ = ["ChatMessage", "ContentPart", "MessageContent", "Role", "ROLES"]
