"""Model parts package.

Contains one dataclass family per module. Prefer importing from
``llm_adapters.base.models``.
"""

from .text_part import TextPart
from .image_part import ImagePart
from .tool_definition import ToolDefinition
from .tool_choice import ToolChoice, ToolChoiceLike, ToolChoiceMode, TOOL_CHOICE_MODES
from .tool_call import ToolCall
from .tool_call_delta import ToolCallDelta
from .usage import Usage
from .message import ChatMessage, ContentPart, MessageContent, Role, ROLES
from .chat_request import ChatCompletionRequest
from .chat_response import ChatCompletion
from .chat_chunk import ChatCompletionChunk
from .completion import CompletionRequest, Completion
from .embedding import EmbeddingRequest, EmbeddingResponse
from .rerank import RerankRequest, RerankResult, RerankResponse
from .model_info import ModelInfo

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
