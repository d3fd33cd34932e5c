"""Vendor usage payload normalization.

This module maps vendor-specific token accounting fields onto the canonical
:class:`~llm_adapters.base.models.Usage` record:

OpenAI-compatible:
    ``prompt_tokens``, ``completion_tokens``; cached input from
    ``prompt_tokens_details.cached_tokens`` (or DeepSeek's
    ``prompt_cache_hit_tokens``).
Anthropic:
    ``input_tokens``, ``output_tokens``; cached input from
    ``cache_read_input_tokens``.

Rules
-----
1. Missing, non-integer or negative values become ``0``; normalization never
   raises on a malformed usage payload.
2. ``total_tokens`` is always ``prompt + completion``. Any vendor-reported
   total is ignored (some totals exclude cache reads, others include cache
   write surcharges), which ``Usage`` enforces by construction.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models import Usage


def _coerce_int(value: Any) -> int:
    """Coerce a vendor count to a non-negative ``int`` (``0`` when unusable)."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return 0
    return iv if iv >= 0 else 0


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def normalize_openai_usage(raw: Optional[Mapping[str, Any]]) -> Usage:
    """Map an OpenAI-style ``usage`` object onto :class:`Usage`."""
    usage = _as_mapping(raw)
    details = _as_mapping(usage.get("prompt_tokens_details"))
    cached = details.get("cached_tokens")
    if cached is None:
        cached = usage.get("prompt_cache_hit_tokens")
    return Usage(
        prompt_tokens=_coerce_int(usage.get("prompt_tokens")),
        completion_tokens=_coerce_int(usage.get("completion_tokens")),
        cached_tokens=_coerce_int(cached),
    )


def normalize_anthropic_usage(raw: Optional[Mapping[str, Any]]) -> Usage:
    """Map an Anthropic ``usage`` object onto :class:`Usage`."""
    usage = _as_mapping(raw)
    return Usage(
        prompt_tokens=_coerce_int(usage.get("input_tokens")),
        completion_tokens=_coerce_int(usage.get("output_tokens")),
        cached_tokens=_coerce_int(usage.get("cache_read_input_tokens")),
    )


__all__ = ["normalize_openai_usage", "normalize_anthropic_usage", "_coerce_int"]
