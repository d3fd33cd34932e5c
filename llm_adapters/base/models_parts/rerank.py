"""Rerank request and ranked-list response."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .usage import Usage


@dataclass
class RerankRequest:
    """Score ``documents`` for relevance to ``query``."""

    model: str
    query: str
    documents: List[str]
    top_n: Optional[int] = None


@dataclass(frozen=True)
class RerankResult:
    """Relevance score of the document at ``index`` in the request."""

    index: int
    relevance_score: float


@dataclass
class RerankResponse:
    """Results ordered by descending relevance."""

    model: str
    results: List[RerankResult] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)


__all__ = ["RerankRequest", "RerankResult", "RerankResponse"]
