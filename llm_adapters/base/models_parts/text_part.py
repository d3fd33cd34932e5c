"""Plain text content part of a chat message."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal


@dataclass(frozen=True)
class TextPart:
    """A text segment inside a multi-part message.

    Empty or whitespace-only parts are legal here; translators drop them.
    """

    text: str
    type: Literal["text"] = "text"

    def is_blank(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI ``{"type": "text", "text": ...}`` shape."""
        return {"type": "text", "text": self.text}


__all__ = ["TextPart"]
