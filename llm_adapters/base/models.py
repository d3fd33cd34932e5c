"""
Canonical data model shared by every adapter (public surface).

Requests, responses and stream chunks follow the OpenAI chat-completions
shape; each type's ``to_dict`` renders that wire form. This module re-exports
the implementations under ``llm_adapters.base.models_parts``.
"""

from .models_parts.text_part import TextPart
from .models_parts.image_part import ImagePart
from .models_parts.tool_definition import ToolDefinition
from .models_parts.tool_choice import ToolChoice, ToolChoiceLike, ToolChoiceMode, TOOL_CHOICE_MODES
from .models_parts.tool_call import ToolCall
from .models_parts.tool_call_delta import ToolCallDelta
from .models_parts.usage import Usage
from .models_parts.message import ChatMessage, ContentPart, MessageContent, Role, ROLES
from .models_parts.chat_request import ChatCompletionRequest
from .models_parts.chat_response import ChatCompletion
from .models_parts.chat_chunk import ChatCompletionChunk
from .models_parts.completion import CompletionRequest, Completion
from .models_parts.embedding import EmbeddingRequest, EmbeddingResponse
from .models_parts.rerank import RerankRequest, RerankResult, RerankResponse
from .models_parts.model_info import ModelInfo

__all__ = [
    "TextPart",
    "ImagePart",
    "ToolDefinition",
    "ToolChoice",
    "ToolChoiceLike",
    "ToolChoiceMode",
    "TOOL_CHOICE_MODES",
    "ToolCall",
    "ToolCallDelta",
    "Usage",
    "ChatMessage",
    "ContentPart",
    "MessageContent",
    "Role",
    "ROLES",
    "ChatCompletionRequest",
    "ChatCompletion",
    "ChatCompletionChunk",
    "CompletionRequest",
    "Completion",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "RerankRequest",
    "RerankResult",
    "RerankResponse",
    "ModelInfo",
]
