"""Anthropic Messages API client.

Purpose:
- Implement the canonical client contract over ``POST {api_base}messages``
  (chat, streaming and non-streaming) and ``GET {api_base}models``.

Behavior:
- Requests are validated, translated, then passed through the configured
  caching strategy before being sent.
- The caller-aborted status (499) yields an empty completion or an empty
  stream.
- Legacy completions, FIM, embeddings and rerank are not offered by the
  vendor and raise ``UnsupportedOperationError``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.dto import validate_chat_request
from ..base.errors import ProtocolError
from ..base.http_api import BaseHttpApi
from ..base.models import ChatCompletion, ChatCompletionChunk, ChatCompletionRequest, ModelInfo, ToolCall
from ..base.tokens import normalize_anthropic_usage
from ..config import ProviderConfig
from ..config.defaults import ANTHROPIC_DEFAULT_BASE_URL
from .caching import apply_caching_strategy
from .stream_decoder import AnthropicStreamDecoder, map_stop_reason
from .translate import build_headers, translate_request


class AnthropicApi(BaseHttpApi):
    """Client for Anthropic's Messages API."""

    _default_api_base = ANTHROPIC_DEFAULT_BASE_URL

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        provider_name: str = "anthropic",
        default_api_base: Optional[str] = None,
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

    def _default_headers(self) -> Dict[str, str]:
        return build_headers(self._config)

    def build_body(self, request: ChatCompletionRequest, *, stream: bool = False) -> Dict[str, Any]:
        """Validate ``request`` and return the vendor body with cache markers."""
        validate_chat_request(request, provider=self._provider_name)
        body, _ = translate_request(request, self._config, stream=stream)
        return apply_caching_strategy(body, self._config.caching_strategy)

    # ----- chat -----
    def chat_completion_non_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> ChatCompletion:
        body = self.build_body(request)

        def _call() -> ChatCompletion:
            payload = self._post_json("messages", body, model=request.model, cancellation_token=cancellation_token)
            if payload is None:
                return ChatCompletion.empty(request.model)
            return parse_message_response(payload, model=request.model, provider=self._provider_name)

        return self._run_non_stream("chat", request.model, _call)

    def chat_completion_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        body = self.build_body(request, stream=True)
        decoder = AnthropicStreamDecoder(model=request.model, provider=self._provider_name)
        return self._stream(
            "messages",
            body,
            model=request.model,
            decoder=decoder,
            cancellation_token=cancellation_token,
        )

    # ----- models -----
    def list_models(self, *, cancellation_token: Optional[CancellationToken] = None) -> List[ModelInfo]:
        def _call() -> List[ModelInfo]:
            payload = self._request_json("GET", "models", cancellation_token=cancellation_token)
            return parse_model_list(payload)

        return self._run_non_stream("models", None, _call)


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def parse_message_response(payload: Any, *, model: str, provider: str = "anthropic") -> ChatCompletion:
    """Map a non-streaming Messages response onto :class:`ChatCompletion`.

    Text blocks are joined in order; ``tool_use`` blocks become tool calls
    whose arguments are the serialized ``input`` object. A body or content
    block that is not a JSON object raises ``ProtocolError``.
    """
    content_blocks = (payload.get("content") or []) if isinstance(payload, dict) else None
    if not isinstance(content_blocks, list) or any(not isinstance(b, dict) for b in content_blocks):
        raise ProtocolError(message="unexpected messages response shape", provider=provider, model=model, raw=payload)
    texts: List[str] = []
    tool_calls: List[ToolCall] = []
    for block in content_blocks:
        kind = block.get("type")
        if kind == "text":
            texts.append(_str_or_none(block.get("text")) or "")
        elif kind == "tool_use":
            tool_calls.append(
                ToolCall(
                    id=str(block.get("id") or ""),
                    name=str(block.get("name") or ""),
                    arguments=json.dumps(block.get("input") or {}),
                )
            )
    content: Optional[str] = "".join(texts)
    if not content and tool_calls:
        content = None
    return ChatCompletion(
        model=model,
        content=content,
        tool_calls=tool_calls,
        finish_reason=map_stop_reason(_str_or_none(payload.get("stop_reason"))) or "stop",
        usage=normalize_anthropic_usage(payload.get("usage")),
        id=str(payload.get("id") or ""),
    )


def parse_model_list(payload: Any) -> List[ModelInfo]:
    if not isinstance(payload, dict):
        return []
    models: List[ModelInfo] = []
    for entry in payload.get("data") or []:
        if not isinstance(entry, dict) or not entry.get("id"):
            continue
        models.append(ModelInfo(id=str(entry["id"]), display_name=entry.get("display_name")))
    return models


__all__ = ["AnthropicApi", "parse_message_response", "parse_model_list"]
