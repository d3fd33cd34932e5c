"""
Model listing entry returned by ``list_models``.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ModelInfo:
    """A model identifier advertised by a provider.

    Attributes:
        id: Identifier to pass as ``model`` in requests.
        display_name: Human-readable name when the vendor supplies one.
        owned_by: Owning organization (OpenAI-style listings).
        created: Unix timestamp when available.
    """

    id: str
    display_name: Optional[str] = None
    owned_by: Optional[str] = None
    created: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["ModelInfo"]
