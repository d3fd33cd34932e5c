from __future__ import annotations

import ssl

import httpx

from llm_adapters.base.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from llm_adapters.base.http.client import build_http_client, build_mounts, build_ssl_verify, build_timeout
from llm_adapters.config import RequestOptions


def test_verify_is_plain_bool_without_tls_material():
    assert build_ssl_verify(RequestOptions()) is True  # nosec B101
    assert build_ssl_verify(RequestOptions(verify_ssl=False)) is False  # nosec B101


def test_timeout_defaults_to_two_hours():
    assert build_timeout(RequestOptions()).read == DEFAULT_REQUEST_TIMEOUT_SECONDS  # nosec B101
    timeout = build_timeout(RequestOptions(timeout=5))
    assert timeout.connect == 5 and timeout.read == 5  # nosec B101


def test_no_mounts_without_proxy():
    assert build_mounts(RequestOptions(), True) is None  # nosec B101


def test_proxy_mounts_honor_no_proxy():
    options = RequestOptions(proxy="http://proxy.local:3128", no_proxy=["localhost", ".internal", " "])
    mounts = build_mounts(options, True)
    assert mounts is not None  # nosec B101
    assert isinstance(mounts["all://"], httpx.HTTPTransport)  # nosec B101
    assert mounts["all://localhost"] is None  # nosec B101
    assert mounts["all://*.internal"] is None  # nosec B101
    assert len(mounts) == 3  # nosec B101


def test_unverified_context_when_ca_bundle_and_verify_disabled(tmp_path, monkeypatch):
    loaded = []
    monkeypatch.setattr(ssl.SSLContext, "load_verify_locations", lambda self, cafile=None, **_: loaded.append(cafile))
    ctx = build_ssl_verify(RequestOptions(verify_ssl=False, ca_bundle_path=[str(tmp_path / "a.pem")]))
    assert isinstance(ctx, ssl.SSLContext)  # nosec B101
    assert ctx.verify_mode == ssl.CERT_NONE  # nosec B101
    assert loaded == [str(tmp_path / "a.pem")]  # nosec B101


def test_client_uses_transport_override():
    transport = httpx.MockTransport(lambda request: httpx.Response(204))
    with build_http_client(RequestOptions(timeout=3), transport=transport) as client:
        assert client.get("https://example.test/").status_code == 204  # nosec B101
        assert client.timeout.read == 3  # nosec B101
        assert client.trust_env is False  # nosec B101
