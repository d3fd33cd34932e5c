"""Embedding request and vector response."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .usage import Usage


@dataclass
class EmbeddingRequest:
    """Embed one string or a batch of strings."""

    model: str
    input: Union[str, List[str]]
    dimensions: Optional[int] = None

    def inputs(self) -> List[str]:
        return [self.input] if isinstance(self.input, str) else list(self.input)


@dataclass
class EmbeddingResponse:
    """Vectors in input order."""

    model: str
    data: List[List[float]] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)


__all__ = ["EmbeddingRequest", "EmbeddingResponse"]
