"""Token usage helpers."""

from .extraction import normalize_anthropic_usage, normalize_openai_usage

__all__ = ["normalize_anthropic_usage", "normalize_openai_usage"]
