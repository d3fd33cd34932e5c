"""Message and parameter normalization helpers shared by translators.

Helpers here are side-effect free and operate on canonical model objects
only.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from ..models import ChatMessage, TextPart


def normalize_stop(stop: Optional[Union[str, List[str]]]) -> List[str]:
    """Return the non-blank stop sequences of ``stop`` (string or list).

    An empty result means the vendor request must omit its stop field.
    """
    if stop is None:
        return []
    if isinstance(stop, str):
        return [stop] if stop.strip() else []
    return [s for s in stop if isinstance(s, str) and s.strip()]


def first_system_text(messages: List[ChatMessage]) -> Optional[str]:
    """Return the text of the first system message (``None`` if absent or blank).

    Later system messages are ignored.
    """
    for message in messages:
        if message.role == "system":
            text = message.text()
            return text if text.strip() else None
    return None


def non_system_messages(messages: List[ChatMessage]) -> List[ChatMessage]:
    return [m for m in messages if m.role != "system"]


def non_blank_parts(message: ChatMessage) -> List[Any]:
    """Return the message's parts with empty text parts removed."""
    return [p for p in message.parts() if not (isinstance(p, TextPart) and p.is_blank())]


def parse_tool_arguments(arguments: Optional[str]) -> Dict[str, Any]:
    """Decode serialized tool-call arguments into an object.

    Unparseable or non-object input yields ``{}``; assistant history may
    contain truncated arguments and must still be replayable.
    """
    if not arguments:
        return {}
    try:
        value = json.loads(arguments)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


__all__ = [
    "normalize_stop",
    "first_system_text",
    "non_system_messages",
    "non_blank_parts",
    "parse_tool_arguments",
    "drop_none",
]
