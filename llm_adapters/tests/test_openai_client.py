"""OpenAIApi over httpx.MockTransport: every endpoint plus error paths."""

from __future__ import annotations

import httpx
import pytest

from llm_adapters.base.errors import ErrorCode, ProtocolError, UpstreamError, ValidationError
from llm_adapters.base.models import (
    ChatCompletionRequest,
    ChatMessage,
    CompletionRequest,
    EmbeddingRequest,
    RerankRequest,
)
from llm_adapters.config import ProviderConfig
from llm_adapters.openai import OpenAIApi
from llm_adapters.tests.helpers import RecordingTransport, openai_sse, sse_response

CHAT_RESPONSE = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "model": "gpt-4o-2024-08-06",
    "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hi!"}, "finish_reason": "stop"}],
    "usage": {"prompt_tokens": 9, "completion_tokens": 2, "total_tokens": 11},
}


def _chat() -> ChatCompletionRequest:
    return ChatCompletionRequest(model="gpt-4o", messages=[ChatMessage(role="user", content="Hello")])


def _api(handler, *, provider_name: str = "openai", **kwargs) -> tuple[OpenAIApi, RecordingTransport]:
    transport = RecordingTransport(handler)
    api = OpenAIApi(ProviderConfig(api_key="sk"), provider_name=provider_name, transport=transport, **kwargs)
    return api, transport


def test_chat_non_stream():
    api, transport = _api(lambda request: httpx.Response(200, json=CHAT_RESPONSE))
    completion = api.chat_completion_non_stream(_chat())
    assert completion.content == "Hi!" and completion.finish_reason == "stop"  # nosec B101
    assert completion.model == "gpt-4o-2024-08-06"  # nosec B101
    assert completion.usage.total_tokens == 11  # nosec B101
    sent = transport.requests[0]
    assert str(sent.url) == "https://api.openai.com/v1/chat/completions"  # nosec B101
    assert sent.headers["authorization"] == "Bearer sk"  # nosec B101


def test_chat_non_stream_tool_calls():
    payload = dict(
        CHAT_RESPONSE,
        choices=[
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [{"id": "call_1", "type": "function", "function": {"name": "f", "arguments": '{"a": 1}'}}],
                },
                "finish_reason": "tool_calls",
            }
        ],
    )
    api, _ = _api(lambda request: httpx.Response(200, json=payload))
    completion = api.chat_completion_non_stream(_chat())
    assert completion.content is None  # nosec B101
    assert completion.tool_calls[0].parsed_arguments() == {"a": 1}  # nosec B101


def test_chat_stream_requests_usage_for_known_vendors():
    body = openai_sse(
        [
            {"id": "c", "choices": [{"delta": {"content": "Hi"}}]},
            {"id": "c", "choices": [{"delta": {}, "finish_reason": "stop"}]},
            {"id": "c", "choices": [], "usage": {"prompt_tokens": 3, "completion_tokens": 1}},
        ]
    )
    api, transport = _api(lambda request: sse_response(body))
    chunks = list(api.chat_completion_stream(_chat()))
    assert [c.delta for c in chunks] == ["Hi", None]  # nosec B101
    assert chunks[-1].usage.total_tokens == 4  # nosec B101
    assert transport.json_bodies()[0]["stream_options"] == {"include_usage": True}  # nosec B101


def test_stream_usage_not_requested_for_other_vendors():
    api, transport = _api(lambda request: sse_response(openai_sse([])), provider_name="ollama", default_api_base="http://localhost:11434/v1/")
    chunks = list(api.chat_completion_stream(_chat()))
    assert len(chunks) == 1 and chunks[0].usage.total_tokens == 0  # nosec B101
    assert "stream_options" not in transport.json_bodies()[0]  # nosec B101
    assert str(transport.requests[0].url) == "http://localhost:11434/v1/chat/completions"  # nosec B101


def test_completion_and_fim():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("fim/completions"):
            return sse_response(openai_sse([{"choices": [{"text": "  return 1", "finish_reason": "stop"}]}]))
        return httpx.Response(200, json={"id": "cmpl", "choices": [{"text": "world", "finish_reason": "length"}]})

    api, transport = _api(handler, provider_name="mistral")
    completion = api.completion_non_stream(CompletionRequest(model="m", prompt="hello"))
    assert completion.text == "world" and completion.finish_reason == "length"  # nosec B101
    chunks = list(api.fim_stream(CompletionRequest(model="codestral", prompt="def f():\n", suffix="\n")))
    assert chunks[0].delta == "  return 1"  # nosec B101
    assert chunks[-1].is_terminal  # nosec B101
    assert transport.json_bodies()[1]["suffix"] == "\n"  # nosec B101


def test_fim_without_suffix_never_sends():
    api, transport = _api(lambda request: httpx.Response(200))
    with pytest.raises(ValidationError):
        api.fim_stream(CompletionRequest(model="m", prompt="p"))
    assert transport.requests == []  # nosec B101


def test_embed_orders_by_index():
    payload = {
        "data": [{"index": 1, "embedding": [0.2, 0.2]}, {"index": 0, "embedding": [0.1, 0.1]}],
        "usage": {"prompt_tokens": 4},
    }
    api, _ = _api(lambda request: httpx.Response(200, json=payload))
    result = api.embed(EmbeddingRequest(model="text-embedding-3-small", input=["a", "b"]))
    assert result.data == [[0.1, 0.1], [0.2, 0.2]]  # nosec B101
    assert result.usage.prompt_tokens == 4 and result.usage.total_tokens == 4  # nosec B101


@pytest.mark.parametrize("key", ["data", "results"])
def test_rerank_accepts_both_result_keys(key):
    payload = {key: [{"index": 0, "relevance_score": 0.1}, {"index": 1, "relevance_score": 0.9}]}
    api, _ = _api(lambda request: httpx.Response(200, json=payload), provider_name="voyage")
    result = api.rerank(RerankRequest(model="rerank-2", query="q", documents=["a", "b"]))
    assert [(r.index, r.relevance_score) for r in result.results] == [(1, 0.9), (0, 0.1)]  # nosec B101


def test_list_models():
    listing = {"data": [{"id": "gpt-4o", "owned_by": "openai", "created": 1700000000}]}
    api, _ = _api(lambda request: httpx.Response(200, json=listing))
    (model,) = api.list_models()
    assert (model.id, model.owned_by, model.created) == ("gpt-4o", "openai", 1700000000)  # nosec B101


def test_missing_endpoint_is_upstream_not_found():
    api, _ = _api(lambda request: httpx.Response(404, json={"error": {"message": "no rerank here"}}), provider_name="groq")
    with pytest.raises(UpstreamError) as info:
        api.rerank(RerankRequest(model="m", query="q", documents=["a"]))
    assert info.value.code is ErrorCode.NOT_FOUND  # nosec B101
    assert info.value.provider == "groq"  # nosec B101


def test_unexpected_shape_is_protocol_error():
    api, _ = _api(lambda request: httpx.Response(200, json={"choices": []}))
    with pytest.raises(ProtocolError):
        api.chat_completion_non_stream(_chat())


def test_non_json_body_is_protocol_error():
    api, _ = _api(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(ProtocolError):
        api.chat_completion_non_stream(_chat())


def test_caller_aborted_status():
    api, _ = _api(lambda request: httpx.Response(499))
    assert api.chat_completion_non_stream(_chat()).content == ""  # nosec B101
    assert list(api.chat_completion_stream(_chat())) == []  # nosec B101
    assert api.embed(EmbeddingRequest(model="m", input="x")).data == []  # nosec B101


@pytest.mark.parametrize(
    "choice",
    [
        {"index": 0, "message": "Hi!"},
        {"index": 0, "message": {"role": "assistant", "tool_calls": ["call_1"]}},
        {"index": 0, "message": {"role": "assistant", "tool_calls": [{"id": "c", "function": "f"}]}},
    ],
)
def test_malformed_chat_message_is_protocol_error(choice):
    api, _ = _api(lambda request: httpx.Response(200, json=dict(CHAT_RESPONSE, choices=[choice])))
    with pytest.raises(ProtocolError):
        api.chat_completion_non_stream(_chat())


def test_malformed_embeddings_and_rerank_entries_are_protocol_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("embeddings"):
            return httpx.Response(200, json={"data": [[0.1, 0.2]]})
        return httpx.Response(200, json={"results": [{"index": 0, "relevance_score": "high"}]})

    api, _ = _api(handler, provider_name="voyage")
    with pytest.raises(ProtocolError):
        api.embed(EmbeddingRequest(model="m", input="x"))
    with pytest.raises(ProtocolError):
        api.rerank(RerankRequest(model="m", query="q", documents=["a"]))
