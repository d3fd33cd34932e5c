"""Anthropic request translation.

Purpose:
- Map a canonical :class:`ChatCompletionRequest` onto the body of
  ``POST {api_base}messages`` plus the request headers.

Mapping notes:
- Only the first system message is honored; it becomes the top-level
  ``system`` field as a single text block. Later system messages are dropped.
- ``tool`` messages become user turns holding ``tool_result`` blocks that
  reference the answered ``tool_use_id``. Consecutive tool results share one
  user turn because Anthropic requires strict user/assistant alternation.
- Assistant ``tool_calls`` become ``tool_use`` blocks whose ``input`` is the
  parsed argument object (unparseable arguments are replayed as ``{}``).
- Empty text parts are dropped; images become base64 ``image`` blocks.
- ``max_tokens`` is required by the vendor and defaults to 4096.
- Penalties have no Anthropic counterpart and are not sent.

The functions here are pure: same input, same output, no I/O.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..base.constants import (
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_PROMPT_CACHING_BETA,
    ANTHROPIC_VERSION,
)
from ..base.logging import get_logger, log_event
from ..base.models import (
    ChatCompletionRequest,
    ChatMessage,
    ImagePart,
    TextPart,
    ToolChoice,
    ToolChoiceLike,
    ToolDefinition,
)
from ..base.utils.messages import (
    drop_none,
    first_system_text,
    non_blank_parts,
    non_system_messages,
    normalize_stop,
    parse_tool_arguments,
)
from ..config import ProviderConfig
from .caching import caching_enabled

_logger = get_logger("adapters.anthropic.translate")

_TOOL_CHOICE_MODES = {"auto": "auto", "required": "any", "none": "none"}


def _content_blocks(message: ChatMessage) -> List[Dict[str, Any]]:
    blocks: List[Dict[str, Any]] = []
    for part in non_blank_parts(message):
        if isinstance(part, TextPart):
            blocks.append({"type": "text", "text": part.text})
        elif isinstance(part, ImagePart):
            blocks.append(
                {
                    "type": "image",
                    "source": {"type": "base64", "media_type": part.mime_type, "data": part.data},
                }
            )
    return blocks


def _tool_use_blocks(message: ChatMessage) -> List[Dict[str, Any]]:
    blocks: List[Dict[str, Any]] = []
    for call in message.tool_calls or []:
        arguments = parse_tool_arguments(call.arguments)
        if not arguments and call.arguments and call.arguments.strip() not in ("", "{}"):
            log_event(
                _logger,
                "translate.warning",
                None,
                provider="anthropic",
                tool_call_id=call.id,
                warning="unparseable tool arguments replayed as {}",
            )
        blocks.append({"type": "tool_use", "id": call.id, "name": call.name, "input": arguments})
    return blocks


def _tool_result_block(message: ChatMessage) -> Dict[str, Any]:
    return {
        "type": "tool_result",
        "tool_use_id": message.tool_call_id,
        "content": message.text(),
    }


def translate_messages(messages: List[ChatMessage]) -> List[Dict[str, Any]]:
    """Convert non-system canonical messages into Anthropic ``messages``."""
    out: List[Dict[str, Any]] = []
    for message in non_system_messages(messages):
        if message.role == "tool":
            block = _tool_result_block(message)
            previous = out[-1] if out else None
            if previous is not None and previous["role"] == "user" and _is_tool_result_turn(previous):
                previous["content"].append(block)
            else:
                out.append({"role": "user", "content": [block]})
            continue
        content = _content_blocks(message)
        if message.role == "assistant":
            content.extend(_tool_use_blocks(message))
        if not content:
            continue
        out.append({"role": message.role, "content": content})
    return out


def _is_tool_result_turn(turn: Dict[str, Any]) -> bool:
    content = turn.get("content")
    return isinstance(content, list) and bool(content) and all(b.get("type") == "tool_result" for b in content)


def translate_tools(tools: List[ToolDefinition]) -> List[Dict[str, Any]]:
    return [
        drop_none({"name": t.name, "description": t.description, "input_schema": dict(t.parameters)})
        for t in tools
    ]


def translate_tool_choice(choice: Optional[ToolChoiceLike]) -> Optional[Dict[str, Any]]:
    if choice is None:
        return None
    if isinstance(choice, ToolChoice):
        return {"type": "tool", "name": choice.name}
    return {"type": _TOOL_CHOICE_MODES[choice]}


def build_headers(config: ProviderConfig) -> Dict[str, str]:
    """Return Anthropic auth/version headers (user headers are merged later)."""
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "anthropic-version": ANTHROPIC_VERSION,
    }
    if config.api_key:
        headers["x-api-key"] = config.api_key
    if caching_enabled(config.caching_strategy):
        headers["anthropic-beta"] = ANTHROPIC_PROMPT_CACHING_BETA
    return headers


def translate_request(
    request: ChatCompletionRequest,
    config: ProviderConfig,
    *,
    stream: bool = False,
) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Build the Anthropic ``messages`` body and headers for ``request``.

    Parameters:
        request: Validated canonical request.
        config: Client configuration (credential, caching strategy).
        stream: Whether the body requests an SSE stream.

    Returns:
        ``(body, headers)``. Caching markers are not applied here; see
        :func:`llm_adapters.anthropic.caching.apply_caching_strategy`.
    """
    body: Dict[str, Any] = {
        "model": request.model,
        "max_tokens": request.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
        "messages": translate_messages(request.messages),
    }
    system = first_system_text(request.messages)
    if system is not None:
        body["system"] = [{"type": "text", "text": system}]
    body.update(
        drop_none(
            {
                "temperature": request.temperature,
                "top_p": request.top_p,
                "top_k": request.top_k,
            }
        )
    )
    stop = normalize_stop(request.stop)
    if stop:
        body["stop_sequences"] = stop
    if request.tools:
        body["tools"] = translate_tools(request.tools)
    tool_choice = translate_tool_choice(request.tool_choice)
    if tool_choice is not None:
        body["tool_choice"] = tool_choice
    if stream:
        body["stream"] = True
    return body, build_headers(config)


__all__ = [
    "translate_request",
    "translate_messages",
    "translate_tools",
    "translate_tool_choice",
    "build_headers",
]
