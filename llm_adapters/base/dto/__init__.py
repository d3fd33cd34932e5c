"""Pydantic request validators guarding every client operation."""

from .chat import ChatRequestDTO, validate_chat_request
from .requests import validate_completion_request, validate_embedding_request, validate_rerank_request

__all__ = [
    "ChatRequestDTO",
    "validate_chat_request",
    "validate_completion_request",
    "validate_embedding_request",
    "validate_rerank_request",
]
