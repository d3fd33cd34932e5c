"""Helpers shared by adapter tests: recording transport and SSE body builders."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Tuple

import httpx

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps the requests it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: List[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handle)

    def json_bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.content]


def anthropic_sse(events: Iterable[Tuple[str, Dict[str, Any]]]) -> bytes:
    """Encode ``(event_name, payload)`` pairs as an SSE body."""
    parts = [f"event: {name}\ndata: {json.dumps(payload)}\n\n" for name, payload in events]
    return "".join(parts).encode("utf-8")


def openai_sse(payloads: Iterable[Dict[str, Any]], *, done: bool = True) -> bytes:
    parts = [f"data: {json.dumps(p)}\n\n" for p in payloads]
    if done:
        parts.append("data: [DONE]\n\n")
    return "".join(parts).encode("utf-8")


def sse_response(body: bytes, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=body, headers={"content-type": "text/event-stream"})


def anthropic_text_events(text_parts: List[str], *, input_tokens: int = 10, output_tokens: int = 3) -> List[Tuple[str, Dict[str, Any]]]:
    """A complete Anthropic text stream emitting one delta per entry."""
    events: List[Tuple[str, Dict[str, Any]]] = [
        (
            "message_start",
            {
                "type": "message_start",
                "message": {"id": "msg_1", "model": "claude", "usage": {"input_tokens": input_tokens, "output_tokens": 1}},
            },
        ),
        ("content_block_start", {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}}),
    ]
    for part in text_parts:
        events.append(
            (
                "content_block_delta",
                {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": part}},
            )
        )
    events.extend(
        [
            ("content_block_stop", {"type": "content_block_stop", "index": 0}),
            (
                "message_delta",
                {"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": output_tokens}},
            ),
            ("message_stop", {"type": "message_stop"}),
        ]
    )
    return events


def events_named(records: List[logging.LogRecord], name: str) -> List[Dict[str, Any]]:
    """Decode captured JSON log payloads whose ``event`` equals ``name``."""
    out: List[Dict[str, Any]] = []
    for record in records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if payload.get("event") == name:
            out.append(payload)
    return out
