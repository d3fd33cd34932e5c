from __future__ import annotations

import pytest

from llm_adapters.base.cancellation import CancellationToken
from llm_adapters.base.models import ChatCompletionChunk, Usage
from llm_adapters.base.streaming import StreamController


def _stream(token: CancellationToken):
    for word in ["a", "b", "c"]:
        if token.cancelled:
            return
        yield ChatCompletionChunk(model="m", delta=word)
    yield ChatCompletionChunk(model="m", usage=Usage(prompt_tokens=1, completion_tokens=3))


def test_controller_captures_terminal_chunk():
    controller = StreamController(_stream)
    deltas = [c.delta for c in controller]
    assert deltas == ["a", "b", "c", None]  # nosec B101
    assert controller.finished  # nosec B101
    assert controller.terminal_chunk is not None  # nosec B101
    assert controller.terminal_chunk.usage.total_tokens == 4  # nosec B101


def test_controller_cancel_stops_stream():
    controller = StreamController(_stream)
    seen = []
    for chunk in controller:
        seen.append(chunk.delta)
        controller.cancel("enough")
    assert seen == ["a"]  # nosec B101
    assert controller.cancelled  # nosec B101
    assert controller.token.reason == "enough"  # nosec B101
    assert controller.terminal_chunk is None  # nosec B101


def test_controller_is_single_use():
    controller = StreamController(_stream)
    list(controller)
    with pytest.raises(RuntimeError):
        list(controller)


def test_controller_uses_given_token():
    token = CancellationToken()
    controller = StreamController(_stream, token=token)
    token.cancel()
    assert list(controller) == []  # nosec B101
    assert controller.cancelled  # nosec B101
