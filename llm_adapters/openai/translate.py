"""OpenAI-compatible request translation.

Purpose:
- Build ``chat/completions``, ``completions``, ``fim/completions``,
  ``embeddings`` and ``rerank`` bodies from canonical requests.

Notes:
- The canonical model already follows the OpenAI shape, so messages are
  mostly serialized as-is. Only the first system message is kept and empty
  text parts are removed from structured content.
- ``top_k`` has no OpenAI counterpart and is not sent.
- ``stream_options.include_usage`` is requested for vendors that only report
  streaming usage when asked (see ``STREAM_USAGE_OPTION_PROVIDERS``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.models import (
    ChatCompletionRequest,
    ChatMessage,
    CompletionRequest,
    EmbeddingRequest,
    RerankRequest,
    ToolChoice,
    ToolChoiceLike,
)
from ..base.utils.messages import drop_none, non_blank_parts, normalize_stop
from ..config import ProviderConfig


def translate_message(message: ChatMessage) -> Dict[str, Any]:
    out = message.to_dict()
    if message.is_structured():
        out["content"] = [p.to_dict() for p in non_blank_parts(message)]
    return out


def translate_messages(messages: List[ChatMessage]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    seen_system = False
    for message in messages:
        if message.role == "system":
            if seen_system:
                continue
            seen_system = True
        out.append(translate_message(message))
    return out


def translate_tool_choice(choice: Optional[ToolChoiceLike]) -> Any:
    if isinstance(choice, ToolChoice):
        return choice.to_dict()
    return choice


def _sampling(**values: Any) -> Dict[str, Any]:
    return drop_none(values)


def translate_chat_request(
    request: ChatCompletionRequest,
    *,
    stream: bool = False,
    include_stream_usage: bool = False,
) -> Dict[str, Any]:
    """Return the ``chat/completions`` body for ``request``."""
    body: Dict[str, Any] = {
        "model": request.model,
        "messages": translate_messages(request.messages),
    }
    body.update(
        _sampling(
            temperature=request.temperature,
            top_p=request.top_p,
            frequency_penalty=request.frequency_penalty,
            presence_penalty=request.presence_penalty,
            max_tokens=request.max_tokens,
        )
    )
    stop = normalize_stop(request.stop)
    if stop:
        body["stop"] = stop
    if request.tools:
        body["tools"] = [t.to_dict() for t in request.tools]
    if request.tool_choice is not None:
        body["tool_choice"] = translate_tool_choice(request.tool_choice)
    if stream:
        body["stream"] = True
        if include_stream_usage:
            body["stream_options"] = {"include_usage": True}
    return body


def translate_completion_request(
    request: CompletionRequest,
    *,
    stream: bool = False,
    include_stream_usage: bool = False,
) -> Dict[str, Any]:
    """Return the ``completions`` (or ``fim/completions``) body."""
    body: Dict[str, Any] = {"model": request.model, "prompt": request.prompt}
    body.update(
        _sampling(
            suffix=request.suffix,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            top_p=request.top_p,
        )
    )
    stop = normalize_stop(request.stop)
    if stop:
        body["stop"] = stop
    if stream:
        body["stream"] = True
        if include_stream_usage:
            body["stream_options"] = {"include_usage": True}
    return body


def translate_embedding_request(request: EmbeddingRequest) -> Dict[str, Any]:
    return drop_none({"model": request.model, "input": request.input, "dimensions": request.dimensions})


def translate_rerank_request(request: RerankRequest) -> Dict[str, Any]:
    return drop_none(
        {
            "model": request.model,
            "query": request.query,
            "documents": list(request.documents),
            "top_n": request.top_n,
        }
    )


def build_headers(config: ProviderConfig) -> Dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if config.api_key:
        headers["Authorization"] = f"Bearer {config.api_key}"
    return headers


__all__ = [
    "translate_chat_request",
    "translate_completion_request",
    "translate_embedding_request",
    "translate_rerank_request",
    "translate_messages",
    "translate_tool_choice",
    "build_headers",
]
