"""MockApi: deterministic offline behavior of the full client contract."""

from __future__ import annotations

import pytest

from llm_adapters.base.cancellation import CancellationToken
from llm_adapters.base.errors import ErrorCode, TransportError, ValidationError
from llm_adapters.base.models import (
    ChatCompletionRequest,
    ChatMessage,
    CompletionRequest,
    EmbeddingRequest,
    RerankRequest,
)
from llm_adapters.base.streaming import StreamController, accumulate_chunks
from llm_adapters.mock import MOCK_MODEL, MockApi
from llm_adapters.tests.helpers import events_named


def _chat(text: str = "hello there") -> ChatCompletionRequest:
    return ChatCompletionRequest(model=MOCK_MODEL, messages=[ChatMessage(role="user", content=text)])


def test_echo_and_canned_replies():
    api = MockApi(responses={"ping": "pong"})
    assert api.chat_completion_non_stream(_chat()).content == "Echo: hello there"  # nosec B101
    completion = api.chat_completion_non_stream(_chat("ping"))
    assert completion.content == "pong"  # nosec B101
    assert (completion.usage.prompt_tokens, completion.usage.completion_tokens) == (1, 1)  # nosec B101


def test_stream_matches_non_stream(log_capture):
    api = MockApi()
    chunks = list(api.chat_completion_stream(_chat()))
    assert [c.delta for c in chunks[:-1]] == ["Echo: ", "hello ", "there"]  # nosec B101
    assert sum(1 for c in chunks if c.is_terminal) == 1 and chunks[-1].is_terminal  # nosec B101
    streamed = accumulate_chunks(chunks)
    direct = api.chat_completion_non_stream(_chat())
    assert streamed.content == direct.content  # nosec B101
    assert streamed.usage == direct.usage  # nosec B101
    assert events_named(log_capture, "stream.end")[0]["emitted"] == 3  # nosec B101


def test_stream_cancellation_mid_way():
    controller = StreamController(lambda token: MockApi().chat_completion_stream(_chat("a b c d"), cancellation_token=token))
    seen = []
    for chunk in controller:
        seen.append(chunk.delta)
        controller.cancel()
    assert seen == ["Echo: "]  # nosec B101
    assert controller.terminal_chunk is None  # nosec B101


def test_cancelled_before_start():
    token = CancellationToken()
    token.cancel()
    api = MockApi()
    with pytest.raises(TransportError) as info:
        api.chat_completion_non_stream(_chat(), cancellation_token=token)
    assert info.value.code is ErrorCode.CANCELLED  # nosec B101
    with pytest.raises(TransportError):
        list(api.chat_completion_stream(_chat(), cancellation_token=token))


def test_validation_applies():
    with pytest.raises(ValidationError):
        MockApi().chat_completion_non_stream(ChatCompletionRequest(model=MOCK_MODEL, messages=[]))


def test_completion_and_fim():
    api = MockApi()
    assert api.completion_non_stream(CompletionRequest(model=MOCK_MODEL, prompt="hi")).text == "Echo: hi"  # nosec B101
    deltas = [c.delta for c in api.completion_stream(CompletionRequest(model=MOCK_MODEL, prompt="hi"))]
    assert deltas == ["Echo: ", "hi", None]  # nosec B101
    fim = list(api.fim_stream(CompletionRequest(model=MOCK_MODEL, prompt="a", suffix="b")))
    assert fim[0].delta == "<fim>" and fim[-1].usage.prompt_tokens == 2  # nosec B101
    with pytest.raises(ValidationError):
        api.fim_stream(CompletionRequest(model=MOCK_MODEL, prompt="a"))


def test_embeddings_are_deterministic():
    api = MockApi()
    first = api.embed(EmbeddingRequest(model=MOCK_MODEL, input=["alpha", "beta"]))
    second = api.embed(EmbeddingRequest(model=MOCK_MODEL, input="alpha"))
    assert len(first.data) == 2 and len(first.data[0]) == 8  # nosec B101
    assert first.data[0] == second.data[0]  # nosec B101
    assert first.data[0] != first.data[1]  # nosec B101
    assert len(api.embed(EmbeddingRequest(model=MOCK_MODEL, input="x", dimensions=3)).data[0]) == 3  # nosec B101


def test_rerank_by_overlap_with_top_n():
    request = RerankRequest(model=MOCK_MODEL, query="red apple", documents=["green pear", "red apple pie", "red car"], top_n=2)
    result = MockApi().rerank(request)
    assert [(r.index, r.relevance_score) for r in result.results] == [(1, 1.0), (2, 0.5)]  # nosec B101


def test_list_models():
    (model,) = MockApi().list_models()
    assert model.id == MOCK_MODEL  # nosec B101
