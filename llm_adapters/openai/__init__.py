"""Generic adapter for OpenAI-compatible vendors."""

from .client import OpenAIApi
from .stream_decoder import OpenAIStreamDecoder
from .translate import translate_chat_request

__all__ = ["OpenAIApi", "OpenAIStreamDecoder", "translate_chat_request"]
