"""
Canonical chat completion request.

Modeled on the OpenAI chat-completions body. Sampling parameters left as
``None`` are omitted from vendor requests (or replaced by a vendor default
where the vendor requires a value). Only the first system message is honored
by translators that have a dedicated system field.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .message import ChatMessage
from .tool_choice import ToolChoiceLike
from .tool_definition import ToolDefinition


@dataclass
class ChatCompletionRequest:
    """Provider-agnostic chat completion request.

    Attributes:
        model: Target model identifier.
        messages: Ordered conversation.
        temperature, top_p, top_k: Sampling controls; ``top_k`` is dropped by
            vendors that do not support it.
        frequency_penalty, presence_penalty: Repetition penalties.
        stop: A single stop sequence or a list; blank entries are discarded.
        max_tokens: Output token ceiling.
        tools: Tool definitions offered to the model.
        tool_choice: ``"auto"``, ``"none"``, ``"required"`` or a
            :class:`ToolChoice` naming one of ``tools``.
        stream: Informational; the client method decides streaming.
    """

    model: str
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    max_tokens: Optional[int] = None
    tools: List[ToolDefinition] = field(default_factory=list)
    tool_choice: Optional[ToolChoiceLike] = None
    stream: bool = False

    def system_message(self) -> Optional[ChatMessage]:
        """Return the first system message, if any."""
        return next((m for m in self.messages if m.role == "system"), None)


__all__ = ["ChatCompletionRequest"]
