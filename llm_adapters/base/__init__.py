"""
Adapter base package.

Exports the provider-agnostic pieces every client is built from:

- Models: canonical request/response/chunk dataclasses
- Interfaces: the ``BaseLlmApi`` client contract
- Errors: the canonical taxonomy
- Streaming: decoder contract, tool-call accumulator and the streaming engine
- Factory: lazy creation of clients by provider identifier
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    ErrorCode,
    ProtocolError,
    ProviderError,
    TransportError,
    UnsupportedOperationError,
    UnsupportedProviderError,
    UpstreamError,
    ValidationError,
)
from .factory import ProviderFactory, create
from .interfaces import BaseLlmApi
from .models import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatMessage,
    Completion,
    CompletionRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    ImagePart,
    ModelInfo,
    RerankRequest,
    RerankResponse,
    RerankResult,
    TextPart,
    ToolCall,
    ToolCallDelta,
    ToolChoice,
    ToolDefinition,
    Usage,
)

__all__ = [
    "BaseLlmApi",
    "CancellationToken",
    "CancelledError",
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "ChatMessage",
    "Completion",
    "CompletionRequest",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "ErrorCode",
    "ImagePart",
    "ModelInfo",
    "ProtocolError",
    "ProviderError",
    "ProviderFactory",
    "RerankRequest",
    "RerankResponse",
    "RerankResult",
    "TextPart",
    "ToolCall",
    "ToolCallDelta",
    "ToolChoice",
    "ToolDefinition",
    "TransportError",
    "UnsupportedOperationError",
    "UnsupportedProviderError",
    "UpstreamError",
    "Usage",
    "ValidationError",
    "create",
]
