"""BaseLlmApi Protocol (single-class module).

Defines the canonical client contract every provider adapter implements.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    Completion,
    CompletionRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    ModelInfo,
    RerankRequest,
    RerankResponse,
)


@runtime_checkable
class BaseLlmApi(Protocol):
    """Canonical client contract.

    Every operation accepts an optional ``cancellation_token``. Operations a
    provider cannot honor raise ``UnsupportedOperationError``. Streaming
    operations are lazy: no request is sent until the iterator is advanced,
    and every complete stream ends with exactly one usage-bearing chunk.
    """

    @property
    def provider_name(self) -> str:
        """Registry identifier of the provider, e.g. ``"anthropic"``."""
        ...

    def chat_completion_non_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> ChatCompletion:
        ...

    def chat_completion_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        ...

    def completion_non_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Completion:
        ...

    def completion_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        ...

    def fim_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        ...

    def embed(
        self, request: EmbeddingRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> EmbeddingResponse:
        ...

    def rerank(
        self, request: RerankRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> RerankResponse:
        ...

    def list_models(self, *, cancellation_token: Optional[CancellationToken] = None) -> List[ModelInfo]:
        ...

    def close(self) -> None:
        """Release the client's HTTP connections."""
        ...


__all__ = ["BaseLlmApi"]
