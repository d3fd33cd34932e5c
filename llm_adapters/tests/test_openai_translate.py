from __future__ import annotations

from llm_adapters.base.models import (
    ChatCompletionRequest,
    ChatMessage,
    CompletionRequest,
    EmbeddingRequest,
    ImagePart,
    RerankRequest,
    TextPart,
    ToolCall,
    ToolChoice,
    ToolDefinition,
)
from llm_adapters.config import ProviderConfig
from llm_adapters.openai.translate import (
    build_headers,
    translate_chat_request,
    translate_completion_request,
    translate_embedding_request,
    translate_rerank_request,
)


def _chat(**kwargs) -> ChatCompletionRequest:
    base = {"model": "gpt-4o", "messages": [ChatMessage(role="user", content="Hello")]}
    base.update(kwargs)
    return ChatCompletionRequest(**base)


def test_minimal_chat_body():
    assert translate_chat_request(_chat()) == {  # nosec B101
        "model": "gpt-4o",
        "messages": [{"role": "user", "content": "Hello"}],
    }


def test_sampling_and_stop_handling():
    body = translate_chat_request(_chat(temperature=0.1, top_k=5, presence_penalty=0.3, max_tokens=20, stop=[" ", "END"]))
    assert body["temperature"] == 0.1 and body["presence_penalty"] == 0.3 and body["max_tokens"] == 20  # nosec B101
    assert "top_k" not in body  # nosec B101
    assert body["stop"] == ["END"]  # nosec B101
    assert "stop" not in translate_chat_request(_chat(stop=""))  # nosec B101


def test_only_first_system_message_kept():
    body = translate_chat_request(
        _chat(
            messages=[
                ChatMessage(role="system", content="a"),
                ChatMessage(role="user", content="hi"),
                ChatMessage(role="system", content="b"),
            ]
        )
    )
    assert [m["role"] for m in body["messages"]] == ["system", "user"]  # nosec B101


def test_structured_content_drops_blank_parts():
    message = ChatMessage(role="user", content=[TextPart(" "), TextPart("look"), ImagePart(data="AA", mime_type="image/png")])
    body = translate_chat_request(_chat(messages=[message]))
    assert body["messages"][0]["content"] == [  # nosec B101
        {"type": "text", "text": "look"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AA"}},
    ]


def test_tools_history_and_choice():
    body = translate_chat_request(
        _chat(
            messages=[
                ChatMessage(role="user", content="hi"),
                ChatMessage(role="assistant", content="", tool_calls=[ToolCall(id="c1", name="f", arguments='{"x": 1}')]),
                ChatMessage(role="tool", content="ok", tool_call_id="c1"),
            ],
            tools=[ToolDefinition(name="f", description="F")],
            tool_choice=ToolChoice("f"),
        )
    )
    assert body["tools"][0] == {  # nosec B101
        "type": "function",
        "function": {"name": "f", "parameters": {"type": "object", "properties": {}}, "description": "F"},
    }
    assert body["tool_choice"] == {"type": "function", "function": {"name": "f"}}  # nosec B101
    assert body["messages"][1]["tool_calls"][0]["function"]["arguments"] == '{"x": 1}'  # nosec B101
    assert body["messages"][2] == {"role": "tool", "content": "ok", "tool_call_id": "c1"}  # nosec B101
    assert translate_chat_request(_chat(tools=[ToolDefinition(name="f")], tool_choice="none"))["tool_choice"] == "none"  # nosec B101


def test_stream_usage_option():
    assert translate_chat_request(_chat(), stream=True) == {  # nosec B101
        "model": "gpt-4o",
        "messages": [{"role": "user", "content": "Hello"}],
        "stream": True,
    }
    body = translate_chat_request(_chat(), stream=True, include_stream_usage=True)
    assert body["stream_options"] == {"include_usage": True}  # nosec B101


def test_completion_embedding_rerank_bodies():
    body = translate_completion_request(CompletionRequest(model="codestral", prompt="def f(", suffix="return 1", max_tokens=8), stream=True)
    assert body == {"model": "codestral", "prompt": "def f(", "suffix": "return 1", "max_tokens": 8, "stream": True}  # nosec B101
    assert translate_embedding_request(EmbeddingRequest(model="e", input=["a"])) == {"model": "e", "input": ["a"]}  # nosec B101
    assert translate_rerank_request(RerankRequest(model="r", query="q", documents=["d1", "d2"], top_n=1)) == {  # nosec B101
        "model": "r",
        "query": "q",
        "documents": ["d1", "d2"],
        "top_n": 1,
    }


def test_bearer_header():
    assert build_headers(ProviderConfig(api_key="sk"))["Authorization"] == "Bearer sk"  # nosec B101
    assert "Authorization" not in build_headers(ProviderConfig())  # nosec B101
