from __future__ import annotations

import pytest

from llm_adapters.base.models import ChatMessage, ImagePart, TextPart
from llm_adapters.base.utils.messages import (
    drop_none,
    first_system_text,
    non_blank_parts,
    non_system_messages,
    normalize_stop,
    parse_tool_arguments,
)


@pytest.mark.parametrize(
    "stop,expected",
    [
        (None, []),
        ("", []),
        ("   ", []),
        ("END", ["END"]),
        (["a", "", " ", "b"], ["a", "b"]),
        ([""], []),
    ],
)
def test_normalize_stop(stop, expected):
    assert normalize_stop(stop) == expected  # nosec B101


def test_first_system_text_only_honors_first():
    messages = [
        ChatMessage(role="system", content="one"),
        ChatMessage(role="user", content="hi"),
        ChatMessage(role="system", content="two"),
    ]
    assert first_system_text(messages) == "one"  # nosec B101
    assert [m.role for m in non_system_messages(messages)] == ["user"]  # nosec B101
    assert first_system_text([ChatMessage(role="system", content="  ")]) is None  # nosec B101


def test_non_blank_parts_drops_empty_text():
    image = ImagePart(data="AA", mime_type="image/png")
    message = ChatMessage(role="user", content=[TextPart(""), TextPart("hi"), image])
    assert non_blank_parts(message) == [TextPart("hi"), image]  # nosec B101


def test_parse_tool_arguments_is_lenient():
    assert parse_tool_arguments('{"x": 1}') == {"x": 1}  # nosec B101
    assert parse_tool_arguments('{"x": ') == {}  # nosec B101
    assert parse_tool_arguments("[1]") == {}  # nosec B101
    assert parse_tool_arguments(None) == {}  # nosec B101


def test_drop_none():
    assert drop_none({"a": 0, "b": None, "c": ""}) == {"a": 0, "c": ""}  # nosec B101
