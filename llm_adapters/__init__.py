"""llm_adapters package

Normalize vendor chat-completion APIs behind one canonical, OpenAI-shaped
contract.

Purpose:
    Callers build canonical requests (``ChatCompletionRequest`` and friends),
    obtain a client with :func:`create` and receive canonical responses or
    chunk streams regardless of the backend.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`ProviderFactory`
    - Configuration: :class:`ProviderConfig`, :class:`RequestOptions`
    - Canonical models, errors and :class:`CancellationToken`
    - Stream helpers: :func:`accumulate_chunks`, :class:`StreamController`

Example:
    >>> from llm_adapters import ChatCompletionRequest, ChatMessage, ProviderConfig, create
    >>> client = create("mock", ProviderConfig())
    >>> client.chat_completion_non_stream(
    ...     ChatCompletionRequest(model="mock-model", messages=[ChatMessage(role="user", content="hi")])
    ... ).content
    'Echo: hi'
"""

from .base import (
    BaseLlmApi,
    CancellationToken,
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    ChatMessage,
    Completion,
    CompletionRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    ErrorCode,
    ImagePart,
    ModelInfo,
    ProtocolError,
    ProviderError,
    ProviderFactory,
    RerankRequest,
    RerankResponse,
    TextPart,
    ToolCall,
    ToolCallDelta,
    ToolChoice,
    ToolDefinition,
    TransportError,
    UnsupportedOperationError,
    UnsupportedProviderError,
    UpstreamError,
    Usage,
    ValidationError,
    create,
)
from .base.streaming import StreamController, accumulate_chunks
from .config import ClientCertificate, ProviderConfig, RequestOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BaseLlmApi",
    "CancellationToken",
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
    "ClientCertificate",
    "ProviderConfig",
    "RequestOptions",
    "StreamController",
    "accumulate_chunks",
]
