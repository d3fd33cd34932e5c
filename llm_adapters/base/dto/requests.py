"""
Pydantic validators for the non-chat canonical requests.

Same contract as ``dto.chat``: validation happens before any network call
and failures surface as the canonical ``ValidationError``.
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from ..errors import ValidationError
from ..models import CompletionRequest, EmbeddingRequest, RerankRequest
from .chat import validate_dto


class CompletionRequestDTO(BaseModel):
    model: str = Field(..., min_length=1)
    prompt: str
    suffix: Optional[str] = None
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    stop: Optional[Union[str, List[str]]] = None


class EmbeddingRequestDTO(BaseModel):
    model: str = Field(..., min_length=1)
    input: Union[str, List[str]]
    dimensions: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _validate_input(self) -> "EmbeddingRequestDTO":
        if isinstance(self.input, list) and not self.input:
            raise ValueError("input must contain at least one string")
        return self


class RerankRequestDTO(BaseModel):
    model: str = Field(..., min_length=1)
    query: str = Field(..., min_length=1)
    documents: List[str] = Field(..., min_length=1)
    top_n: Optional[int] = Field(default=None, gt=0)


def validate_completion_request(request: CompletionRequest, *, provider: str = "unknown", fim: bool = False) -> None:
    """Validate a legacy completion (or, with ``fim=True``, a FIM) request."""
    validate_dto(CompletionRequestDTO, dataclasses.asdict(request), provider=provider, model=request.model)
    if fim and request.suffix is None:
        raise ValidationError(message="suffix: required for fill-in-the-middle", provider=provider, model=request.model)


def validate_embedding_request(request: EmbeddingRequest, *, provider: str = "unknown") -> None:
    validate_dto(EmbeddingRequestDTO, dataclasses.asdict(request), provider=provider, model=request.model)


def validate_rerank_request(request: RerankRequest, *, provider: str = "unknown") -> None:
    validate_dto(RerankRequestDTO, dataclasses.asdict(request), provider=provider, model=request.model)


__all__ = [
    "CompletionRequestDTO",
    "EmbeddingRequestDTO",
    "RerankRequestDTO",
    "validate_completion_request",
    "validate_embedding_request",
    "validate_rerank_request",
]
