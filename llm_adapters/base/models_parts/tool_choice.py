"""
Tool-choice directive.

A request's ``tool_choice`` is either one of the mode strings ``"auto"``,
``"none"`` and ``"required"``, or a :class:`ToolChoice` naming the single tool
the model must call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Union

ToolChoiceMode = Literal["auto", "none", "required"]
TOOL_CHOICE_MODES = ("auto", "none", "required")


@dataclass(frozen=True)
class ToolChoice:
    """Force a call to the tool called ``name``."""

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "function", "function": {"name": self.name}}


ToolChoiceLike = Union[ToolChoiceMode, ToolChoice]


__all__ = ["ToolChoice", "ToolChoiceMode", "ToolChoiceLike", "TOOL_CHOICE_MODES"]
