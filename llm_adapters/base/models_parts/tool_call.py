"""
Completed tool invocation emitted by the model.

``arguments`` is serialized JSON text. A `ToolCall` only exists once every
argument fragment has been received, so its arguments always parse.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ToolCall:
    """A structured function invocation with a vendor-stable id."""

    id: str
    name: str
    arguments: str = "{}"

    def parsed_arguments(self) -> Dict[str, Any]:
        """Return ``arguments`` decoded as a JSON object."""
        value = json.loads(self.arguments or "{}")
        return value if isinstance(value, dict) else {"value": value}

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI assistant ``tool_calls`` entry shape."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


__all__ = ["ToolCall"]
