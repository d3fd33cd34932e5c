"""
Canonical token usage record.

``total_tokens`` is not a constructor argument: it is always derived as
``prompt_tokens + completion_tokens`` so no vendor-reported total can leak
into the canonical record.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Usage:
    """Token accounting for one call.

    Attributes:
        prompt_tokens: Input tokens billed for the call.
        completion_tokens: Output tokens generated.
        cached_tokens: Input tokens served from a prompt cache (0 if the
            vendor does not report it).
        total_tokens: ``prompt_tokens + completion_tokens`` (derived).
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    cached_tokens: int = 0
    total_tokens: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_tokens", self.prompt_tokens + self.completion_tokens)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "prompt_tokens_details": {"cached_tokens": self.cached_tokens},
        }


__all__ = ["Usage"]
