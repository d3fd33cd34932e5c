"""Server-sent events framing over ``httpx`` line iteration.

Purpose:
    Group the lines produced by ``httpx.Response.iter_lines()`` into
    :class:`ServerSentEvent` records (``event`` tag + joined ``data``). Both
    representative vendor framings are covered: Anthropic names every event
    with an ``event:`` line, OpenAI-compatible servers send bare ``data:``
    lines terminated by ``data: [DONE]``.

Framing rules:
    - A blank line dispatches the pending event (if it has any field set).
    - ``field: value`` strips one optional space after the colon.
    - Multiple ``data`` lines join with ``\\n``.
    - Lines starting with ``:`` are comments (keep-alives) and are skipped.
    - A pending event is dispatched at end of input even without the final
      blank line, so truncated-but-complete payloads are not lost.

Payload parsing is left to the vendor decoders; this module never inspects
``data``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

import httpx


@dataclass(frozen=True)
class ServerSentEvent:
    """One dispatched SSE event."""

    event: str = "message"
    data: str = ""
    id: Optional[str] = None


def iter_sse(lines: Iterable[str]) -> Iterator[ServerSentEvent]:
    """Yield events parsed from an iterable of text lines (without newlines)."""
    event: Optional[str] = None
    data: List[str] = []
    last_id: Optional[str] = None
    dirty = False

    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            if dirty:
                yield ServerSentEvent(event=event or "message", data="\n".join(data), id=last_id)
            event, data, dirty = None, [], False
            continue
        if line.startswith(":"):
            continue
        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if name == "event":
            event = value
            dirty = True
        elif name == "data":
            data.append(value)
            dirty = True
        elif name == "id":
            last_id = value
            dirty = True
        # "retry" and unknown fields are ignored

    if dirty:
        yield ServerSentEvent(event=event or "message", data="\n".join(data), id=last_id)


def iter_sse_response(response: httpx.Response) -> Iterator[ServerSentEvent]:
    """Yield SSE events from a streaming ``httpx`` response body."""
    yield from iter_sse(response.iter_lines())


__all__ = ["ServerSentEvent", "iter_sse", "iter_sse_response"]
