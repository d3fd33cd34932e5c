"""Anthropic Messages API adapter.

``AnthropicApi`` is the client; ``translate``, ``caching`` and
``stream_decoder`` hold the pure request/stream mapping it composes.
"""

from .client import AnthropicApi
from .caching import CACHING_STRATEGIES, apply_caching_strategy
from .stream_decoder import AnthropicStreamDecoder
from .translate import translate_request

__all__ = [
    "AnthropicApi",
    "AnthropicStreamDecoder",
    "CACHING_STRATEGIES",
    "apply_caching_strategy",
    "translate_request",
]
