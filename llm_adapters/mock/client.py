"""Deterministic mock client for offline tests.

Purpose
-------
Implement the full canonical client contract without any network traffic so
callers can exercise their own code (streaming consumers, tool loops,
logging) against predictable output.

Behavior
--------
- Chat replies echo the last user message as ``"Echo: <text>"`` unless a
  canned reply is registered for that exact text via ``responses``.
- Streams yield one chunk per word followed by the terminal usage chunk.
- Token counts are whitespace word counts.
- ``embed`` derives vectors from a SHA-256 digest of each input; ``rerank``
  scores documents by word overlap with the query.
- Requests are validated exactly like the HTTP clients validate them.

External dependencies
---------------------
Standard library only; no I/O.
"""

from __future__ import annotations

import hashlib
import re
from typing import Dict, Iterator, List, Mapping, Optional

from ..base.cancellation import CancellationToken
from ..base.dto import (
    validate_chat_request,
    validate_completion_request,
    validate_embedding_request,
    validate_rerank_request,
)
from ..base.errors import ErrorCode, TransportError
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatMessage,
    Completion,
    CompletionRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    ModelInfo,
    RerankRequest,
    RerankResponse,
    RerankResult,
    Usage,
)
from ..config import ProviderConfig

MOCK_MODEL = "mock-model"
EMBEDDING_DIMENSIONS = 8

_WORD_CHUNK = re.compile(r"\S+\s*")


def _count_tokens(text: str) -> int:
    return len(text.split())


def _chunk_text(text: str) -> List[str]:
    """Split ``text`` into word chunks, each keeping its trailing whitespace."""
    return _WORD_CHUNK.findall(text)


def _embed_text(text: str, dimensions: int) -> List[float]:
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [digest[i % len(digest)] / 255.0 for i in range(dimensions)]


class MockApi:
    """Canned-response client implementing ``BaseLlmApi``."""

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        provider_name: str = "mock",
        responses: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._config = config or ProviderConfig()
        self._provider_name = provider_name
        self._responses: Dict[str, str] = dict(responses or {})
        self._logger = get_logger(f"adapters.mock.{provider_name}")

    @property
    def provider_name(self) -> str:
        return self._provider_name

    @property
    def config(self) -> ProviderConfig:
        return self._config

    def close(self) -> None:
        """Nothing to release."""

    def __enter__(self) -> "MockApi":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Helpers

    def _reply_for(self, messages: List[ChatMessage]) -> str:
        last_user = next((m.text() for m in reversed(messages) if m.role == "user"), "")
        if last_user in self._responses:
            return self._responses[last_user]
        return f"Echo: {last_user}"

    def _check_cancelled(self, token: Optional[CancellationToken], model: str) -> None:
        if token is not None and token.cancelled:
            raise TransportError(
                message=token.reason or "operation cancelled",
                provider=self._provider_name,
                model=model,
                code=ErrorCode.CANCELLED,
                retryable=False,
            )

    def _stream_text(
        self,
        text: str,
        *,
        model: str,
        prompt_tokens: int,
        token: Optional[CancellationToken],
    ) -> Iterator[ChatCompletionChunk]:
        ctx = LogContext(provider=self._provider_name, model=model, operation="stream")
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", attempt=1)
        self._check_cancelled(token, model)
        emitted = 0
        for piece in _chunk_text(text):
            if token is not None and token.cancelled:
                normalized_log_event(
                    self._logger,
                    "stream.cancelled",
                    ctx,
                    phase="cancelled",
                    attempt=1,
                    error_code=ErrorCode.CANCELLED.value,
                    emitted=emitted,
                )
                return
            emitted += 1
            yield ChatCompletionChunk(model=model, delta=piece)
        usage = Usage(prompt_tokens=prompt_tokens, completion_tokens=_count_tokens(text))
        normalized_log_event(
            self._logger, "stream.end", ctx, phase="finalize", attempt=1, emitted=emitted, tokens=usage
        )
        yield ChatCompletionChunk(model=model, usage=usage, finish_reason="stop")

    # ------------------------------------------------------------------
    # Canonical contract

    def chat_completion_non_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> ChatCompletion:
        validate_chat_request(request, provider=self._provider_name)
        self._check_cancelled(cancellation_token, request.model)
        text = self._reply_for(request.messages)
        prompt = sum(_count_tokens(m.text()) for m in request.messages)
        usage = Usage(prompt_tokens=prompt, completion_tokens=_count_tokens(text))
        ctx = LogContext(provider=self._provider_name, model=request.model, operation="chat")
        normalized_log_event(self._logger, "chat.end", ctx, phase="finalize", attempt=1, tokens=usage)
        return ChatCompletion(model=request.model, content=text, finish_reason="stop", usage=usage)

    def chat_completion_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        validate_chat_request(request, provider=self._provider_name)
        text = self._reply_for(request.messages)
        prompt = sum(_count_tokens(m.text()) for m in request.messages)
        return self._stream_text(text, model=request.model, prompt_tokens=prompt, token=cancellation_token)

    def completion_non_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Completion:
        validate_completion_request(request, provider=self._provider_name)
        self._check_cancelled(cancellation_token, request.model)
        text = self._responses.get(request.prompt, f"Echo: {request.prompt}")
        usage = Usage(prompt_tokens=_count_tokens(request.prompt), completion_tokens=_count_tokens(text))
        return Completion(model=request.model, text=text, finish_reason="stop", usage=usage)

    def completion_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        validate_completion_request(request, provider=self._provider_name)
        text = self._responses.get(request.prompt, f"Echo: {request.prompt}")
        return self._stream_text(
            text, model=request.model, prompt_tokens=_count_tokens(request.prompt), token=cancellation_token
        )

    def fim_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        validate_completion_request(request, provider=self._provider_name, fim=True)
        prompt_tokens = _count_tokens(request.prompt) + _count_tokens(request.suffix or "")
        return self._stream_text("<fim>", model=request.model, prompt_tokens=prompt_tokens, token=cancellation_token)

    def embed(
        self, request: EmbeddingRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> EmbeddingResponse:
        validate_embedding_request(request, provider=self._provider_name)
        self._check_cancelled(cancellation_token, request.model)
        dims = request.dimensions or EMBEDDING_DIMENSIONS
        inputs = request.inputs()
        usage = Usage(prompt_tokens=sum(_count_tokens(t) for t in inputs))
        return EmbeddingResponse(model=request.model, data=[_embed_text(t, dims) for t in inputs], usage=usage)

    def rerank(
        self, request: RerankRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> RerankResponse:
        validate_rerank_request(request, provider=self._provider_name)
        self._check_cancelled(cancellation_token, request.model)
        query = set(request.query.lower().split())
        results = []
        for index, doc in enumerate(request.documents):
            words = set(doc.lower().split())
            score = len(query & words) / len(query) if query else 0.0
            results.append(RerankResult(index=index, relevance_score=score))
        results.sort(key=lambda r: (-r.relevance_score, r.index))
        if request.top_n is not None:
            results = results[: request.top_n]
        return RerankResponse(model=request.model, results=results)

    def list_models(self, *, cancellation_token: Optional[CancellationToken] = None) -> List[ModelInfo]:
        self._check_cancelled(cancellation_token, MOCK_MODEL)
        return [ModelInfo(id=MOCK_MODEL, display_name="Mock Model", owned_by="llm_adapters")]


__all__ = ["MockApi", "MOCK_MODEL"]
