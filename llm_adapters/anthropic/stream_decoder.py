"""Anthropic Messages streaming decoder.

Purpose:
- Translate the typed SSE events of ``POST messages`` (``stream: true``) into
  canonical :class:`ChatCompletionChunk` objects.

State machine (``BlockState``):

    IDLE --content_block_start(text)-----> TEXT_BLOCK
    IDLE --content_block_start(tool_use)-> TOOL_BLOCK   (accumulator opens)
    TEXT_BLOCK/TOOL_BLOCK --content_block_stop--> IDLE (tool block closed)

A tool block that closes without any ``input_json_delta`` yields one
``ToolCallDelta`` with arguments ``"{}"`` so the call is not lost.

Event handling:
- ``message_start``: prompt and cached tokens captured; stays IDLE.
- ``content_block_delta``: ``text_delta`` yields a text chunk;
  ``input_json_delta`` appends to the open tool call and yields a
  ``ToolCallDelta``. A json delta without an open tool call is a
  ``ProtocolError``.
- ``message_delta``: running output token count and stop reason.
- ``message_stop``: ``done``; the adapter then calls :meth:`finish`.
- ``error``: raised as ``UpstreamError``.
- ``ping``, thinking deltas and unknown events are ignored.
- A nested field of the wrong JSON type is a ``ProtocolError``.

Usage counters from ``message_start`` and ``message_delta`` are merged (the
latest value wins) and normalized by ``normalize_anthropic_usage`` at
:meth:`AnthropicStreamDecoder.finish`.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from ..base.constants import DEFAULT_FINISH_REASON
from ..base.errors import ErrorCode, ProtocolError, UpstreamError, classify_status, is_retryable_code
from ..base.http.sse import ServerSentEvent
from ..base.models import ChatCompletionChunk, ToolCallDelta
from ..base.streaming import ToolCallAccumulator
from ..base.tokens import normalize_anthropic_usage

STOP_REASON_MAP: Dict[str, str] = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
    "tool_use": "tool_calls",
}

# Anthropic error ``type`` -> equivalent HTTP status for classification.
_ERROR_TYPE_STATUS: Dict[str, int] = {
    "invalid_request_error": 400,
    "authentication_error": 401,
    "permission_error": 403,
    "not_found_error": 404,
    "request_too_large": 413,
    "rate_limit_error": 429,
    "api_error": 500,
    "overloaded_error": 529,
}


class BlockState(str, Enum):
    IDLE = "idle"
    TEXT_BLOCK = "text_block"
    TOOL_BLOCK = "tool_block"


def map_stop_reason(reason: Optional[str]) -> Optional[str]:
    if reason is None:
        return None
    return STOP_REASON_MAP.get(reason, reason)


class AnthropicStreamDecoder:
    """Per-stream decoder; create one for each streaming call."""

    def __init__(self, *, model: str, provider: str = "anthropic") -> None:
        self._model = model
        self._provider = provider
        self._accumulator = ToolCallAccumulator(provider=provider, model=model)
        self._state = BlockState.IDLE
        self._block_index: Optional[int] = None
        self._message_id = ""
        self._usage: Dict[str, Any] = {}
        self._stop_reason: Optional[str] = None
        self._done = False
        self._finished = False

    @property
    def done(self) -> bool:
        return self._done

    @property
    def state(self) -> BlockState:
        return self._state

    @property
    def accumulator(self) -> ToolCallAccumulator:
        return self._accumulator

    # ----- helpers -----
    def _protocol_error(self, message: str, raw: Any = None) -> ProtocolError:
        return ProtocolError(message=message, provider=self._provider, model=self._model, raw=raw)

    def _chunk(self, **kwargs: Any) -> ChatCompletionChunk:
        return ChatCompletionChunk(model=self._model, id=self._message_id, **kwargs)

    def _parse(self, event: ServerSentEvent) -> Optional[Dict[str, Any]]:
        if not event.data.strip():
            return None
        try:
            payload = json.loads(event.data)
        except ValueError as exc:
            raise self._protocol_error(f"stream event is not JSON: {exc}", raw=event.data) from exc
        if not isinstance(payload, dict):
            raise self._protocol_error("stream event is not a JSON object", raw=event.data)
        return payload

    def _object(self, payload: Dict[str, Any], key: str) -> Dict[str, Any]:
        """``payload[key]`` as a dict; absent or null gives ``{}``."""
        value = payload.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise self._protocol_error(f"'{key}' is not a JSON object", raw=payload)
        return value

    def _index(self, payload: Dict[str, Any], default: Optional[int]) -> Optional[int]:
        index = payload.get("index", default)
        if index is not None and (not isinstance(index, int) or isinstance(index, bool)):
            raise self._protocol_error("content block 'index' is not an integer", raw=payload)
        return index

    def _merge_usage(self, usage: Dict[str, Any]) -> None:
        self._usage.update({k: v for k, v in usage.items() if v is not None})

    # ----- decoder contract -----
    def feed(self, event: ServerSentEvent) -> List[ChatCompletionChunk]:
        payload = self._parse(event)
        if payload is None:
            return []
        kind = payload.get("type") or event.event
        if not isinstance(kind, str):
            raise self._protocol_error("stream event 'type' is not a string", raw=payload)
        handler = getattr(self, f"_on_{kind}", None)
        if handler is None:
            return []
        return handler(payload) or []

    def finish(self) -> ChatCompletionChunk:
        """Return the terminal usage chunk.

        Tool blocks still open at this point belong to a truncated stream and
        are dropped.
        """
        if self._finished:
            raise self._protocol_error("stream decoder finished twice")
        self._finished = True
        self._done = True
        usage = normalize_anthropic_usage(self._usage)
        return self._chunk(usage=usage, finish_reason=map_stop_reason(self._stop_reason) or DEFAULT_FINISH_REASON)

    # ----- event handlers -----
    def _on_message_start(self, payload: Dict[str, Any]) -> None:
        message = self._object(payload, "message")
        self._message_id = str(message.get("id") or "")
        self._merge_usage(self._object(message, "usage"))

    def _on_content_block_start(self, payload: Dict[str, Any]) -> None:
        block = self._object(payload, "content_block")
        index = self._index(payload, 0)
        if block.get("type") == "tool_use":
            self._accumulator.open(index, str(block.get("id") or ""), str(block.get("name") or ""))
            self._state = BlockState.TOOL_BLOCK
        elif block.get("type") == "text":
            self._state = BlockState.TEXT_BLOCK
        else:
            self._state = BlockState.IDLE
        self._block_index = index

    def _on_content_block_delta(self, payload: Dict[str, Any]) -> List[ChatCompletionChunk]:
        delta = self._object(payload, "delta")
        kind = delta.get("type")
        if kind == "text_delta":
            text = delta.get("text")
            if text is not None and not isinstance(text, str):
                raise self._protocol_error("text_delta 'text' is not a string", raw=payload)
            return [self._chunk(delta=text)] if text else []
        if kind == "input_json_delta":
            index = self._index(payload, self._block_index)
            if self._state is not BlockState.TOOL_BLOCK or not self._accumulator.is_open(index):
                raise self._protocol_error("input_json_delta received with no active tool call", raw=payload)
            fragment = delta.get("partial_json") or ""
            if not isinstance(fragment, str):
                raise self._protocol_error("input_json_delta 'partial_json' is not a string", raw=payload)
            call = self._accumulator.append(index, fragment)
            tool_delta = ToolCallDelta(index=call.ordinal, id=call.id, name=call.name, arguments=fragment)
            return [self._chunk(tool_calls=[tool_delta])]
        return []

    def _on_content_block_stop(self, payload: Dict[str, Any]) -> List[ChatCompletionChunk]:
        index = self._index(payload, self._block_index)
        chunks: List[ChatCompletionChunk] = []
        call = self._accumulator.get(index) if self._state is BlockState.TOOL_BLOCK else None
        if call is not None:
            no_input = not call.arguments()
            closed = self._accumulator.close(index)
            if no_input:
                tool_delta = ToolCallDelta(index=call.ordinal, id=closed.id, name=closed.name, arguments=closed.arguments)
                chunks.append(self._chunk(tool_calls=[tool_delta]))
        self._state = BlockState.IDLE
        self._block_index = None
        return chunks

    def _on_message_delta(self, payload: Dict[str, Any]) -> None:
        self._merge_usage(self._object(payload, "usage"))
        stop_reason = self._object(payload, "delta").get("stop_reason")
        if isinstance(stop_reason, str) and stop_reason:
            self._stop_reason = stop_reason

    def _on_message_stop(self, payload: Dict[str, Any]) -> None:
        self._done = True

    def _on_error(self, payload: Dict[str, Any]) -> None:
        error = payload.get("error")
        if not isinstance(error, dict):
            error = {"message": str(error)} if error else {}
        status = _ERROR_TYPE_STATUS.get(str(error.get("type")))
        code = classify_status(status) if status is not None else ErrorCode.UPSTREAM
        raise UpstreamError(
            message=str(error.get("message") or error.get("type") or "stream error"),
            provider=self._provider,
            model=self._model,
            code=code,
            retryable=is_retryable_code(code),
            raw=payload,
        )


__all__ = ["AnthropicStreamDecoder", "BlockState", "STOP_REASON_MAP", "map_stop_reason"]
