"""Tool (function) definition offered to the model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolDefinition:
    """A callable tool described by name, description and JSON schema.

    Attributes:
        name: Function name the model uses to invoke the tool.
        description: Optional human-readable description.
        parameters: JSON schema of the argument object.
    """

    name: str
    description: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI ``{"type": "function", "function": {...}}`` shape."""
        fn: Dict[str, Any] = {"name": self.name, "parameters": dict(self.parameters)}
        if self.description is not None:
            fn["description"] = self.description
        return {"type": "function", "function": fn}


__all__ = ["ToolDefinition"]
