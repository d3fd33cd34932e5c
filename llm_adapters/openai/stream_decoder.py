"""OpenAI-compatible streaming decoder.

Purpose:
- Translate ``data:`` SSE events of ``chat/completions``, ``completions``
  and ``fim/completions`` streams into canonical chunks.

Notes:
- ``data: [DONE]`` ends the stream.
- Tool-call fragments are keyed by ``tool_calls[].index``; the first fragment
  for an index opens the call (it carries ``id`` and ``function.name``),
  later fragments only append ``function.arguments``.
- Usage may arrive on any chunk (usually a final chunk with empty
  ``choices``); the last one seen is reported on the terminal chunk. Vendors
  that never report usage produce a zero usage record.
- With ``text_mode=True`` content is read from ``choices[0].text`` (legacy
  completion and FIM streams) instead of ``choices[0].delta.content``.
- A ``choices`` entry, ``delta``, tool-call fragment or ``function`` that is
  not a JSON object (or text that is not a string) is a ``ProtocolError``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..base.constants import DEFAULT_FINISH_REASON, SSE_DONE_SENTINEL
from ..base.errors import ProtocolError, UpstreamError, extract_error_message
from ..base.http.sse import ServerSentEvent
from ..base.models import ChatCompletionChunk, ToolCallDelta, Usage
from ..base.streaming import ToolCallAccumulator
from ..base.tokens import normalize_openai_usage


class OpenAIStreamDecoder:
    """Per-stream decoder for OpenAI-shaped SSE bodies."""

    def __init__(self, *, model: str, provider: str = "openai", text_mode: bool = False) -> None:
        self._model = model
        self._provider = provider
        self._text_mode = text_mode
        self._accumulator = ToolCallAccumulator(provider=provider, model=model)
        self._usage: Optional[Usage] = None
        self._finish_reason: Optional[str] = None
        self._response_id = ""
        self._done = False
        self._finished = False

    @property
    def done(self) -> bool:
        return self._done

    @property
    def accumulator(self) -> ToolCallAccumulator:
        return self._accumulator

    def _protocol_error(self, message: str, raw: Any = None) -> ProtocolError:
        return ProtocolError(message=message, provider=self._provider, model=self._model, raw=raw)

    def _chunk(self, **kwargs: Any) -> ChatCompletionChunk:
        return ChatCompletionChunk(model=self._model, id=self._response_id, **kwargs)

    def feed(self, event: ServerSentEvent) -> List[ChatCompletionChunk]:
        data = event.data.strip()
        if not data:
            return []
        if data == SSE_DONE_SENTINEL:
            self._done = True
            return []
        try:
            payload = json.loads(data)
        except ValueError as exc:
            raise self._protocol_error(f"stream event is not JSON: {exc}", raw=data) from exc
        if not isinstance(payload, dict):
            raise self._protocol_error("stream event is not a JSON object", raw=data)
        if payload.get("error"):
            raise UpstreamError(
                message=extract_error_message(payload, "stream error"),
                provider=self._provider,
                model=self._model,
                raw=payload,
            )
        if payload.get("id"):
            self._response_id = str(payload["id"])
        if payload.get("usage"):
            self._usage = normalize_openai_usage(payload["usage"])
        choices = payload.get("choices") or []
        if not isinstance(choices, list):
            raise self._protocol_error("'choices' is not a JSON array", raw=payload)
        if not choices:
            return []
        return self._on_choice(self._object(choices[0], "choices[0]"))

    def _object(self, value: Any, where: str) -> Dict[str, Any]:
        """``value`` as a dict; null gives ``{}``, any other type is a ``ProtocolError``."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise self._protocol_error(f"'{where}' is not a JSON object", raw=value)
        return value

    def _string(self, value: Any, where: str) -> Optional[str]:
        if value is not None and not isinstance(value, str):
            raise self._protocol_error(f"'{where}' is not a string", raw=value)
        return value

    def _on_choice(self, choice: Dict[str, Any]) -> List[ChatCompletionChunk]:
        if choice.get("finish_reason"):
            self._finish_reason = str(choice["finish_reason"])
        if self._text_mode:
            text = self._string(choice.get("text"), "choices[0].text")
            return [self._chunk(delta=text)] if text else []
        delta = self._object(choice.get("delta"), "choices[0].delta")
        text = self._string(delta.get("content"), "delta.content")
        fragments = delta.get("tool_calls") or []
        if not isinstance(fragments, list):
            raise self._protocol_error("'delta.tool_calls' is not a JSON array", raw=delta)
        tool_deltas = [self._on_tool_fragment(self._object(raw, "delta.tool_calls[]")) for raw in fragments]
        if not text and not tool_deltas:
            return []
        return [self._chunk(delta=text or None, tool_calls=tool_deltas)]

    def _on_tool_fragment(self, raw: Dict[str, Any]) -> ToolCallDelta:
        index = raw.get("index", 0)
        if not isinstance(index, int) or isinstance(index, bool):
            raise self._protocol_error("tool call fragment 'index' is not an integer", raw=raw)
        fn = self._object(raw.get("function"), "tool_calls[].function")
        call = self._accumulator.get(index)
        if call is None:
            if not raw.get("id") and not fn.get("name"):
                raise self._protocol_error(f"tool call fragment for unknown index {index}", raw=raw)
            call = self._accumulator.open(index, str(raw.get("id") or ""), str(fn.get("name") or ""))
        fragment = self._string(fn.get("arguments"), "function.arguments") or ""
        if fragment:
            self._accumulator.append(index, fragment)
        return ToolCallDelta(index=call.ordinal, id=call.id, name=call.name, arguments=fragment)

    def finish(self) -> ChatCompletionChunk:
        """Return the terminal usage chunk.

        Tool calls of a stream that reported a finish reason are closed (and
        their arguments validated); a stream cut short drops them.
        """
        if self._finished:
            raise self._protocol_error("stream decoder finished twice")
        self._finished = True
        self._done = True
        if self._finish_reason is not None:
            self._accumulator.close_all()
        usage = self._usage or Usage()
        return self._chunk(usage=usage, finish_reason=self._finish_reason or DEFAULT_FINISH_REASON)


__all__ = ["OpenAIStreamDecoder"]
