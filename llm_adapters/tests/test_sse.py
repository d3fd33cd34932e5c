"""SSE framing tests for both vendor framings."""

from __future__ import annotations

import httpx

from llm_adapters.base.http.sse import ServerSentEvent, iter_sse, iter_sse_response


def test_named_events_and_default_name():
    lines = ["event: message_start", 'data: {"a":1}', "", 'data: {"b":2}', ""]
    events = list(iter_sse(lines))
    assert events == [  # nosec B101
        ServerSentEvent(event="message_start", data='{"a":1}'),
        ServerSentEvent(event="message", data='{"b":2}'),
    ]


def test_multiline_data_comments_and_id():
    lines = [": keep-alive", "id: 7", "data: first", "data:second", "retry: 100", ""]
    (event,) = list(iter_sse(lines))
    assert event.data == "first\nsecond"  # nosec B101
    assert event.id == "7"  # nosec B101


def test_blank_lines_without_fields_dispatch_nothing():
    assert list(iter_sse(["", "", ": ping", ""])) == []  # nosec B101


def test_trailing_event_without_blank_line_is_kept():
    events = list(iter_sse(["data: [DONE]"]))
    assert [e.data for e in events] == ["[DONE]"]  # nosec B101


def test_crlf_lines_are_trimmed():
    events = list(iter_sse(["data: x\r", "\r"]))
    assert events[0].data == "x"  # nosec B101


def test_iter_sse_response_reads_body():
    response = httpx.Response(200, content=b"event: ping\ndata: {}\n\ndata: [DONE]\n\n")
    events = list(iter_sse_response(response))
    assert [(e.event, e.data) for e in events] == [("ping", "{}"), ("message", "[DONE]")]  # nosec B101
