"""Generic client for OpenAI-compatible HTTP APIs.

Purpose:
- One implementation serves every vendor whose API mirrors OpenAI's
  (OpenAI itself, Groq, DeepSeek, Mistral, Ollama, vLLM, ...). Vendors differ
  only in ``api_base`` and in whether streaming usage must be requested via
  ``stream_options``; both come from the factory registry.

Endpoints (relative to ``api_base``):
- ``chat/completions``: chat, streaming and non-streaming.
- ``completions``: legacy text completion.
- ``fim/completions``: fill-in-the-middle streaming.
- ``embeddings``, ``rerank``, ``models``.

Vendors that lack an endpoint answer with an error status, which surfaces
as ``UpstreamError`` (typically ``code=not_found``).
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.dto import (
    validate_chat_request,
    validate_completion_request,
    validate_embedding_request,
    validate_rerank_request,
)
from ..base.errors import ProtocolError
from ..base.http_api import BaseHttpApi
from ..base.models import (
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
    RerankResult,
    ToolCall,
)
from ..base.tokens import normalize_openai_usage
from ..config import ProviderConfig
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, STREAM_USAGE_OPTION_PROVIDERS
from .stream_decoder import OpenAIStreamDecoder
from .translate import (
    build_headers,
    translate_chat_request,
    translate_completion_request,
    translate_embedding_request,
    translate_rerank_request,
)


def _is_function_call(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("function") or {}, dict)


class OpenAIApi(BaseHttpApi):
    """Client for OpenAI-compatible vendors.

    Parameters:
        config: Provider configuration.
        provider_name: Registry id reported in errors and logs.
        default_api_base: Endpoint root used when ``config.api_base`` is unset.
        stream_usage: Request ``stream_options.include_usage`` on streams;
            defaults to whether ``provider_name`` is known to need it.
    """

    _default_api_base = OPENAI_DEFAULT_BASE_URL

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        provider_name: str = "openai",
        default_api_base: Optional[str] = None,
        stream_usage: Optional[bool] = None,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(
            config,
            provider_name=provider_name,
            default_api_base=default_api_base,
            http_client=http_client,
            transport=transport,
        )
        if stream_usage is None:
            stream_usage = provider_name in STREAM_USAGE_OPTION_PROVIDERS
        self._stream_usage = stream_usage

    def _default_headers(self) -> Dict[str, str]:
        return build_headers(self._config)

    # ----- chat -----
    def chat_completion_non_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> ChatCompletion:
        validate_chat_request(request, provider=self._provider_name)
        body = translate_chat_request(request)

        def _call() -> ChatCompletion:
            payload = self._post_json(
                "chat/completions", body, model=request.model, cancellation_token=cancellation_token
            )
            if payload is None:
                return ChatCompletion.empty(request.model)
            return self._parse_chat(payload, request.model)

        return self._run_non_stream("chat", request.model, _call)

    def chat_completion_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        validate_chat_request(request, provider=self._provider_name)
        body = translate_chat_request(request, stream=True, include_stream_usage=self._stream_usage)
        decoder = OpenAIStreamDecoder(model=request.model, provider=self._provider_name)
        return self._stream(
            "chat/completions", body, model=request.model, decoder=decoder, cancellation_token=cancellation_token
        )

    # ----- legacy completions / FIM -----
    def completion_non_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Completion:
        validate_completion_request(request, provider=self._provider_name)
        body = translate_completion_request(request)

        def _call() -> Completion:
            payload = self._post_json("completions", body, model=request.model, cancellation_token=cancellation_token)
            if payload is None:
                return Completion(model=request.model)
            return self._parse_completion(payload, request.model)

        return self._run_non_stream("completion", request.model, _call)

    def completion_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        validate_completion_request(request, provider=self._provider_name)
        body = translate_completion_request(request, stream=True, include_stream_usage=self._stream_usage)
        decoder = OpenAIStreamDecoder(model=request.model, provider=self._provider_name, text_mode=True)
        return self._stream(
            "completions", body, model=request.model, decoder=decoder, cancellation_token=cancellation_token
        )

    def fim_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        validate_completion_request(request, provider=self._provider_name, fim=True)
        body = translate_completion_request(request, stream=True, include_stream_usage=self._stream_usage)
        decoder = OpenAIStreamDecoder(model=request.model, provider=self._provider_name, text_mode=True)
        return self._stream(
            "fim/completions", body, model=request.model, decoder=decoder, cancellation_token=cancellation_token
        )

    # ----- embeddings / rerank / models -----
    def embed(
        self, request: EmbeddingRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> EmbeddingResponse:
        validate_embedding_request(request, provider=self._provider_name)
        body = translate_embedding_request(request)

        def _call() -> EmbeddingResponse:
            payload = self._post_json("embeddings", body, model=request.model, cancellation_token=cancellation_token)
            if payload is None:
                return EmbeddingResponse(model=request.model)
            return self._parse_embeddings(payload, request.model)

        return self._run_non_stream("embed", request.model, _call)

    def rerank(
        self, request: RerankRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> RerankResponse:
        validate_rerank_request(request, provider=self._provider_name)
        body = translate_rerank_request(request)

        def _call() -> RerankResponse:
            payload = self._post_json("rerank", body, model=request.model, cancellation_token=cancellation_token)
            if payload is None:
                return RerankResponse(model=request.model)
            return self._parse_rerank(payload, request.model)

        return self._run_non_stream("rerank", request.model, _call)

    def list_models(self, *, cancellation_token: Optional[CancellationToken] = None) -> List[ModelInfo]:
        def _call() -> List[ModelInfo]:
            payload = self._request_json("GET", "models", cancellation_token=cancellation_token)
            return self._parse_models(payload)

        return self._run_non_stream("models", None, _call)

    # ----- response parsing -----
    def _shape_error(self, what: str, model: Optional[str], payload: Any) -> ProtocolError:
        return ProtocolError(
            message=f"unexpected {what} response shape",
            provider=self._provider_name,
            model=model,
            raw=payload,
        )

    def _first_choice(self, payload: Any, model: str, what: str) -> Dict[str, Any]:
        choices = payload.get("choices") if isinstance(payload, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise self._shape_error(what, model, payload)
        return choices[0]

    def _parse_chat(self, payload: Any, model: str) -> ChatCompletion:
        choice = self._first_choice(payload, model, "chat completion")
        message = choice.get("message") or {}
        raw_calls = (message.get("tool_calls") or []) if isinstance(message, dict) else None
        if not isinstance(raw_calls, list) or not all(_is_function_call(tc) for tc in raw_calls):
            raise self._shape_error("chat completion", model, payload)
        tool_calls = [
            ToolCall(
                id=str(tc.get("id") or ""),
                name=str((tc.get("function") or {}).get("name") or ""),
                arguments=(tc.get("function") or {}).get("arguments") or "{}",
            )
            for tc in raw_calls
        ]
        return ChatCompletion(
            model=str(payload.get("model") or model),
            content=message.get("content"),
            tool_calls=tool_calls,
            finish_reason=choice.get("finish_reason"),
            usage=normalize_openai_usage(payload.get("usage")),
            id=str(payload.get("id") or ""),
        )

    def _parse_completion(self, payload: Any, model: str) -> Completion:
        choice = self._first_choice(payload, model, "completion")
        return Completion(
            model=str(payload.get("model") or model),
            text=choice.get("text") or "",
            finish_reason=choice.get("finish_reason"),
            usage=normalize_openai_usage(payload.get("usage")),
            id=str(payload.get("id") or ""),
        )

    def _parse_embeddings(self, payload: Any, model: str) -> EmbeddingResponse:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise self._shape_error("embeddings", model, payload)
        ordered = sorted(data, key=lambda item: item.get("index", 0))
        return EmbeddingResponse(
            model=str(payload.get("model") or model),
            data=[list(item.get("embedding") or []) for item in ordered],
            usage=normalize_openai_usage(payload.get("usage")),
        )

    def _parse_rerank(self, payload: Any, model: str) -> RerankResponse:
        if not isinstance(payload, dict):
            raise self._shape_error("rerank", model, payload)
        # Voyage-style ``data`` or Cohere/Jina-style ``results``
        entries = payload.get("data")
        if entries is None:
            entries = payload.get("results")
        if not isinstance(entries, list):
            raise self._shape_error("rerank", model, payload)
        try:
            results = [
                RerankResult(index=int(entry.get("index", 0)), relevance_score=float(entry.get("relevance_score", 0.0)))
                for entry in entries
            ]
        except (AttributeError, TypeError, ValueError) as exc:
            raise self._shape_error("rerank", model, payload) from exc
        results.sort(key=lambda r: r.relevance_score, reverse=True)
        return RerankResponse(
            model=str(payload.get("model") or model),
            results=results,
            usage=normalize_openai_usage(payload.get("usage")),
        )

    def _parse_models(self, payload: Any) -> List[ModelInfo]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            return []
        return [
            ModelInfo(
                id=str(entry["id"]),
                owned_by=entry.get("owned_by"),
                created=entry.get("created"),
            )
            for entry in data
            if isinstance(entry, dict) and entry.get("id")
        ]


__all__ = ["OpenAIApi"]
