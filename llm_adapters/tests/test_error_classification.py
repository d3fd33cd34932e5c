from __future__ import annotations

import types

import httpx
import pytest

from llm_adapters.base.errors import (
    ErrorCode,
    ProviderError,
    TransportError,
    UpstreamError,
    classify_exception,
    classify_status,
    extract_error_message,
    is_retryable_code,
    raise_for_upstream,
    transport_error_from,
)


def test_classify_provider_error_passthrough():
    e = ProviderError(code=ErrorCode.AUTH, message="nope", provider="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_classify_status_fallbacks():
    assert classify_status(429) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_status(529) is ErrorCode.UNAVAILABLE  # nosec B101
    assert classify_status(507) is ErrorCode.SERVER_ERROR  # nosec B101
    assert classify_status(418) is ErrorCode.UPSTREAM  # nosec B101
    assert is_retryable_code(ErrorCode.RATE_LIMIT)  # nosec B101
    assert not is_retryable_code(ErrorCode.AUTH)  # nosec B101


@pytest.mark.parametrize(
    "body,expected",
    [
        ({"error": {"type": "invalid_request_error", "message": "bad model"}}, "bad model"),
        ({"error": "quota"}, "quota"),
        ({"message": "nope"}, "nope"),
        ({"detail": "missing"}, "missing"),
    ],
)
def test_extract_error_message_shapes(body, expected):
    assert extract_error_message(body, "fallback") == expected  # nosec B101


def test_extract_error_message_fallback_for_non_json():
    assert extract_error_message(None, "Bad Gateway") == "Bad Gateway"  # nosec B101


def test_raise_for_upstream_parses_json_body():
    response = httpx.Response(
        401,
        json={"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}},
    )
    with pytest.raises(UpstreamError) as info:
        raise_for_upstream(response, provider="anthropic", model="claude")
    err = info.value
    assert err.status_code == 401  # nosec B101
    assert err.code is ErrorCode.AUTH  # nosec B101
    assert err.message == "invalid x-api-key"  # nosec B101
    assert err.provider == "anthropic" and err.model == "claude"  # nosec B101
    assert not err.retryable  # nosec B101


def test_raise_for_upstream_keeps_raw_text():
    response = httpx.Response(502, text="<html>bad gateway</html>")
    with pytest.raises(UpstreamError) as info:
        raise_for_upstream(response, provider="openai")
    assert info.value.message == "<html>bad gateway</html>"  # nosec B101
    assert info.value.raw == "<html>bad gateway</html>"  # nosec B101
    assert info.value.retryable  # nosec B101


def test_raise_for_upstream_success_is_noop():
    raise_for_upstream(httpx.Response(200, json={}), provider="openai")


def test_transport_error_from_timeout():
    err = transport_error_from(httpx.ReadTimeout("read timed out"), provider="openai", model="gpt")
    assert isinstance(err, TransportError)  # nosec B101
    assert err.code is ErrorCode.TIMEOUT  # nosec B101
    assert err.retryable  # nosec B101


def test_transport_error_from_connect_error():
    err = transport_error_from(httpx.ConnectError("dns failure"), provider="openai")
    assert err.code is ErrorCode.TRANSPORT  # nosec B101
    assert "dns failure" in str(err)  # nosec B101
