"""Stream consumption helpers.

``accumulate_chunks`` folds a canonical chunk stream into the equivalent
non-streaming :class:`ChatCompletion`: text deltas are concatenated, tool
call fragments are reassembled per ``ToolCallDelta.index`` through a
:class:`ToolCallAccumulator`, and usage comes from the terminal chunk.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..errors import ProtocolError
from ..models import ChatCompletion, ChatCompletionChunk, Usage
from .accumulator import ToolCallAccumulator


def accumulate_chunks(chunks: Iterable[ChatCompletionChunk], *, model: Optional[str] = None) -> ChatCompletion:
    """Consume ``chunks`` and return the assembled completion.

    An empty stream (caller-aborted request) yields an empty completion.

    Raises:
        ProtocolError: Content arrived after the terminal chunk, or tool-call
            arguments do not form valid JSON.
    """
    text: List[str] = []
    tools = ToolCallAccumulator(model=model)
    usage: Optional[Usage] = None
    finish_reason: Optional[str] = None
    resolved_model = model or ""
    response_id = ""
    saw_text = False

    for chunk in chunks:
        if usage is not None:
            raise ProtocolError(message="chunk received after terminal usage chunk", model=resolved_model)
        resolved_model = chunk.model or resolved_model
        response_id = chunk.id or response_id
        if chunk.delta is not None:
            saw_text = True
            text.append(chunk.delta)
        for delta in chunk.tool_calls:
            if not tools.is_open(delta.index):
                tools.open(delta.index, delta.id or "", delta.name or "")
            call = tools.get(delta.index)
            if call is not None:
                if delta.id and not call.id:
                    call.id = delta.id
                if delta.name and not call.name:
                    call.name = delta.name
            if delta.arguments:
                tools.append(delta.index, delta.arguments)
        if chunk.finish_reason is not None:
            finish_reason = chunk.finish_reason
        if chunk.usage is not None:
            usage = chunk.usage

    tool_calls = tools.close_all()
    content = "".join(text) if saw_text or not tool_calls else None
    return ChatCompletion(
        model=resolved_model,
        content=content,
        tool_calls=tool_calls,
        finish_reason=finish_reason,
        usage=usage or Usage(),
        id=response_id,
    )


__all__ = ["accumulate_chunks"]
