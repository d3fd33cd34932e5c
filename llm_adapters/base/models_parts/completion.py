"""
Legacy text completion and fill-in-the-middle request/response types.

FIM requests are plain completion requests with a ``suffix``: the model
generates the text that belongs between ``prompt`` and ``suffix``. Streamed
completions reuse `ChatCompletionChunk` as their incremental unit.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .usage import Usage


@dataclass
class CompletionRequest:
    """Prompt-in, text-out request (legacy ``completions`` / FIM)."""

    model: str
    prompt: str
    suffix: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: bool = False


@dataclass
class Completion:
    """Non-streaming text completion result."""

    model: str
    text: str = ""
    finish_reason: Optional[str] = None
    usage: Usage = field(default_factory=Usage)
    id: str = ""
    created: int = field(default_factory=lambda: int(time.time()))


__all__ = ["CompletionRequest", "Completion"]
