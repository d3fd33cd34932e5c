"""Incremental tool-call fragment carried by a streaming chunk."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCallDelta:
    """One fragment of a tool call in flight.

    ``index`` identifies the tool call within the response (0 for the first
    tool call, 1 for the second, ...). ``id`` and ``name`` are repeated on
    every fragment; ``arguments`` holds only the new text, which is not valid
    JSON on its own.
    """

    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        fn: Dict[str, Any] = {}
        if self.name is not None:
            fn["name"] = self.name
        if self.arguments is not None:
            fn["arguments"] = self.arguments
        out: Dict[str, Any] = {"index": self.index, "type": "function", "function": fn}
        if self.id is not None:
            out["id"] = self.id
        return out


__all__ = ["ToolCallDelta"]
