"""
Pydantic DTOs and validators for canonical chat requests.

Purpose
-------
Validate a :class:`ChatCompletionRequest` before any translation or network
call. The canonical model itself is made of plain dataclasses; this module
mirrors it with strict Pydantic models that enforce roles, tool-call
references, tool-choice consistency and numeric parameter bounds.

External dependencies: Pydantic only (no network). No timeouts.

Failure semantics
-----------------
``validate_chat_request`` raises the canonical ``ValidationError`` (never
``pydantic.ValidationError``) so callers handle a single taxonomy.

Rules
-----
- ``model`` is non-blank; ``messages`` is non-empty.
- A ``tool`` message carries a ``tool_call_id`` that references a tool call
  made by an earlier assistant message.
- ``tool_calls`` only appear on assistant messages.
- A named ``tool_choice`` references a defined tool; ``"required"`` needs at
  least one tool.
- Sampling parameters are range-checked.
"""

from __future__ import annotations

import dataclasses
from typing import Annotated, Any, Dict, List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError
from ..models import ChatCompletionRequest

Role = Literal["system", "user", "assistant", "tool"]


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TextPartDTO(_StrictModel):
    type: Literal["text"]
    text: str


class ImagePartDTO(_StrictModel):
    """Inline image: base64 ``data`` plus an ``image/*`` mime type."""

    type: Literal["image"]
    data: str = Field(..., min_length=1)
    mime_type: str = Field(..., pattern=r"^image/[A-Za-z0-9.+-]+$")


ContentPartDTO = Annotated[Union[TextPartDTO, ImagePartDTO], Field(discriminator="type")]


class ToolCallDTO(_StrictModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    arguments: str = "{}"


class MessageDTO(_StrictModel):
    """A chat message with either a text string or typed parts.

    Rules:
        - ``tool`` messages need ``tool_call_id``.
        - Only ``assistant`` messages may carry ``tool_calls``.
    """

    role: Role
    content: Union[str, List[ContentPartDTO]] = ""
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCallDTO]] = None

    @model_validator(mode="after")
    def _validate_role_fields(self) -> "MessageDTO":
        if self.role == "tool" and not (self.tool_call_id and self.tool_call_id.strip()):
            raise ValueError("tool message requires tool_call_id")
        if self.tool_calls and self.role != "assistant":
            raise ValueError("tool_calls are only allowed on assistant messages")
        return self


class ToolSpecDTO(_StrictModel):
    name: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)


class NamedToolChoiceDTO(_StrictModel):
    name: str = Field(..., min_length=1)


class ChatRequestDTO(_StrictModel):
    """Validated mirror of :class:`ChatCompletionRequest`.

    Raises:
        pydantic.ValidationError: On invalid roles, dangling tool references,
            unknown tool choice or out-of-range parameters.
    """

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, gt=0)
    frequency_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(default=None, ge=-2.0, le=2.0)
    stop: Optional[Union[str, List[str]]] = None
    max_tokens: Optional[int] = Field(default=None, gt=0)
    tools: List[ToolSpecDTO] = Field(default_factory=list)
    tool_choice: Optional[Union[Literal["auto", "none", "required"], NamedToolChoiceDTO]] = None

    @model_validator(mode="after")
    def _validate_model_name(self) -> "ChatRequestDTO":
        if not self.model.strip():
            raise ValueError("model must be non-blank")
        return self

    @model_validator(mode="after")
    def _validate_tools(self) -> "ChatRequestDTO":
        names = [t.name for t in self.tools]
        if len(set(names)) != len(names):
            raise ValueError("tool names must be unique")
        choice = self.tool_choice
        if isinstance(choice, NamedToolChoiceDTO) and choice.name not in names:
            raise ValueError(f"tool_choice names undefined tool '{choice.name}'")
        if choice == "required" and not names:
            raise ValueError("tool_choice 'required' needs at least one tool")
        return self

    @model_validator(mode="after")
    def _validate_tool_references(self) -> "ChatRequestDTO":
        issued: Set[str] = set()
        for index, message in enumerate(self.messages):
            if message.role == "assistant" and message.tool_calls:
                issued.update(tc.id for tc in message.tool_calls)
            elif message.role == "tool" and message.tool_call_id not in issued:
                raise ValueError(
                    f"messages[{index}] answers tool call '{message.tool_call_id}' "
                    "that no earlier assistant message made"
                )
        return self


def _first_error(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = str(first.get("msg", "invalid value"))
    return f"{loc}: {msg}" if loc else msg


def validate_dto(dto_cls: type[BaseModel], payload: Dict[str, Any], *, provider: str, model: Optional[str]) -> BaseModel:
    """Validate ``payload`` with ``dto_cls``, raising the canonical ``ValidationError``."""
    try:
        return dto_cls.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(message=_first_error(exc), provider=provider, model=model, raw=exc) from exc


def validate_chat_request(request: ChatCompletionRequest, *, provider: str = "unknown") -> ChatRequestDTO:
    """Validate a canonical chat request before translation.

    Raises:
        ValidationError: The request violates any rule listed in the module
            docstring.
    """
    if not isinstance(request, ChatCompletionRequest):
        raise ValidationError(message="request must be a ChatCompletionRequest", provider=provider)
    payload = dataclasses.asdict(request)
    return validate_dto(ChatRequestDTO, payload, provider=provider, model=request.model)  # type: ignore[return-value]


__all__ = [
    "Role",
    "TextPartDTO",
    "ImagePartDTO",
    "ToolCallDTO",
    "MessageDTO",
    "ToolSpecDTO",
    "NamedToolChoiceDTO",
    "ChatRequestDTO",
    "validate_dto",
    "validate_chat_request",
]
