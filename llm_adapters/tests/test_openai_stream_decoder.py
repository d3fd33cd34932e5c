"""OpenAIStreamDecoder: chat, tool-call and text-mode streams."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest

from llm_adapters.base.errors import ProtocolError, UpstreamError
from llm_adapters.base.http.sse import ServerSentEvent
from llm_adapters.base.models import ChatCompletionChunk
from llm_adapters.openai.stream_decoder import OpenAIStreamDecoder


def _data(payload: Dict[str, Any]) -> ServerSentEvent:
    return ServerSentEvent(data=json.dumps(payload))


DONE = ServerSentEvent(data="[DONE]")


def _run(decoder: OpenAIStreamDecoder, payloads: List[Dict[str, Any]]) -> List[ChatCompletionChunk]:
    chunks: List[ChatCompletionChunk] = []
    for payload in payloads:
        chunks.extend(decoder.feed(_data(payload)))
    decoder.feed(DONE)
    chunks.append(decoder.finish())
    return chunks


def test_text_stream_with_usage_chunk():
    decoder = OpenAIStreamDecoder(model="gpt-4o")
    chunks = _run(
        decoder,
        [
            {"id": "c1", "choices": [{"index": 0, "delta": {"role": "assistant", "content": ""}}]},
            {"id": "c1", "choices": [{"index": 0, "delta": {"content": "Hi"}}]},
            {"id": "c1", "choices": [{"index": 0, "delta": {}, "finish_reason": "stop"}]},
            {"id": "c1", "choices": [], "usage": {"prompt_tokens": 7, "completion_tokens": 1, "total_tokens": 100}},
        ],
    )
    assert decoder.done  # nosec B101
    assert [c.delta for c in chunks] == ["Hi", None]  # nosec B101
    terminal = chunks[-1]
    assert terminal.id == "c1" and terminal.finish_reason == "stop"  # nosec B101
    assert terminal.usage.total_tokens == 8  # nosec B101


def test_missing_usage_defaults_to_zero():
    chunks = _run(OpenAIStreamDecoder(model="m"), [{"choices": [{"delta": {"content": "x"}}]}])
    assert chunks[-1].usage.total_tokens == 0  # nosec B101
    assert chunks[-1].finish_reason == "stop"  # nosec B101


def test_tool_call_fragments():
    decoder = OpenAIStreamDecoder(model="m")
    chunks = _run(
        decoder,
        [
            {"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "call_1", "type": "function", "function": {"name": "f", "arguments": ""}}]}}]},
            {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": '{"a":'}}]}}]},
            {"choices": [{"delta": {"tool_calls": [{"index": 0, "function": {"arguments": " 2}"}}]}}]},
            {"choices": [{"delta": {}, "finish_reason": "tool_calls"}]},
        ],
    )
    deltas = [d for c in chunks for d in c.tool_calls]
    assert {(d.index, d.id, d.name) for d in deltas} == {(0, "call_1", "f")}  # nosec B101
    assert "".join(d.arguments or "" for d in deltas) == '{"a": 2}'  # nosec B101
    assert decoder.accumulator.completed[0].parsed_arguments() == {"a": 2}  # nosec B101
    assert chunks[-1].finish_reason == "tool_calls"  # nosec B101


def test_fragment_for_unknown_index_is_protocol_error():
    decoder = OpenAIStreamDecoder(model="m")
    with pytest.raises(ProtocolError):
        decoder.feed(_data({"choices": [{"delta": {"tool_calls": [{"index": 3, "function": {"arguments": "{}"}}]}}]}))


def test_invalid_tool_json_fails_on_finish():
    decoder = OpenAIStreamDecoder(model="m")
    decoder.feed(_data({"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "c", "function": {"name": "f", "arguments": "{"}}]}}]}))
    decoder.feed(_data({"choices": [{"delta": {}, "finish_reason": "tool_calls"}]}))
    with pytest.raises(ProtocolError):
        decoder.finish()


def test_text_mode_reads_choice_text():
    chunks = _run(
        OpenAIStreamDecoder(model="m", text_mode=True),
        [{"choices": [{"text": "def "}]}, {"choices": [{"text": "f():", "finish_reason": "length"}]}],
    )
    assert [c.delta for c in chunks] == ["def ", "f():", None]  # nosec B101
    assert chunks[-1].finish_reason == "length"  # nosec B101


def test_error_payload_raises_upstream_error():
    with pytest.raises(UpstreamError, match="quota exceeded"):
        OpenAIStreamDecoder(model="m").feed(_data({"error": {"message": "quota exceeded"}}))


def test_malformed_data_is_protocol_error():
    with pytest.raises(ProtocolError):
        OpenAIStreamDecoder(model="m").feed(ServerSentEvent(data="{not json"))


@pytest.mark.parametrize(
    "payload",
    [
        {"choices": {"index": 0}},
        {"choices": ["hello"]},
        {"choices": [{"delta": "hello"}]},
        {"choices": [{"delta": {"content": ["hi"]}}]},
        {"choices": [{"delta": {"tool_calls": {"index": 0}}}]},
        {"choices": [{"delta": {"tool_calls": ["call_1"]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": "0", "id": "c", "function": {"name": "f"}}]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "c", "function": "f"}]}}]},
        {"choices": [{"delta": {"tool_calls": [{"index": 0, "id": "c", "function": {"name": "f", "arguments": {"a": 1}}}]}}]},
    ],
)
def test_malformed_nested_fields_are_protocol_errors(payload):
    with pytest.raises(ProtocolError):
        OpenAIStreamDecoder(model="m").feed(_data(payload))


def test_text_mode_rejects_non_string_text():
    with pytest.raises(ProtocolError):
        OpenAIStreamDecoder(model="m", text_mode=True).feed(_data({"choices": [{"text": 42}]}))


def test_null_delta_is_ignored():
    decoder = OpenAIStreamDecoder(model="m")
    assert decoder.feed(_data({"choices": [{"delta": None, "finish_reason": "stop"}]})) == []  # nosec B101
    assert decoder.finish().finish_reason == "stop"  # nosec B101
