"""Base shared constants for adapters.

Central location to avoid scattering magic strings and default numbers.
"""
from __future__ import annotations

# Status a vendor proxy returns when the caller aborted or superseded the
# request; translated into a quiet empty response instead of an error.
ABORTED_BY_CALLER_STATUS = 499

# Request timeout when the caller does not configure one (seconds).
DEFAULT_REQUEST_TIMEOUT_SECONDS = 7200.0

# Anthropic wire protocol
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_PROMPT_CACHING_BETA = "prompt-caching-2024-07-31"
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# SSE terminator used by OpenAI-compatible streams
SSE_DONE_SENTINEL = "[DONE]"

DEFAULT_FINISH_REASON = "stop"

__all__ = [
    "ABORTED_BY_CALLER_STATUS",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "ANTHROPIC_VERSION",
    "ANTHROPIC_PROMPT_CACHING_BETA",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "SSE_DONE_SENTINEL",
    "DEFAULT_FINISH_REASON",
]
