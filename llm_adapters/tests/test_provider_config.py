"""ProviderConfig validation: normalization, aliases and immutability."""

from __future__ import annotations

import pydantic
import pytest

from llm_adapters.config import ProviderConfig, RequestOptions


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://api.example.com/v1", "https://api.example.com/v1/"),
        ("https://api.example.com/v1/", "https://api.example.com/v1/"),
        ("  http://localhost:8000  ", "http://localhost:8000/"),
        ("", None),
        (None, None),
    ],
)
def test_api_base_is_normalized(raw, expected):
    assert ProviderConfig(api_base=raw).api_base == expected  # nosec B101


def test_with_default_api_base_only_fills_missing():
    explicit = ProviderConfig(api_base="https://proxy.local")
    assert explicit.with_default_api_base("https://api.anthropic.com/v1/") is explicit  # nosec B101
    filled = ProviderConfig().with_default_api_base("https://api.anthropic.com/v1")
    assert filled.api_base == "https://api.anthropic.com/v1/"  # nosec B101


def test_camel_case_aliases_accepted():
    cfg = ProviderConfig.model_validate(
        {
            "apiKey": "sk-test",
            "apiBase": "https://api.example.com",
            "cachingStrategy": "optimized",
            "requestOptions": {"timeout": 30, "verifySsl": False, "caBundlePath": ["/a.pem", "/b.pem"], "noProxy": ["localhost"]},
        }
    )
    assert cfg.api_key == "sk-test"  # nosec B101
    assert cfg.caching_strategy == "optimized"  # nosec B101
    assert cfg.request_options.timeout == 30  # nosec B101
    assert cfg.request_options.verify_ssl is False  # nosec B101
    assert cfg.request_options.ca_bundle_paths() == ["/a.pem", "/b.pem"]  # nosec B101
    assert cfg.request_options.no_proxy == ["localhost"]  # nosec B101


def test_config_is_frozen_and_strict():
    cfg = ProviderConfig(api_key="k")
    with pytest.raises(pydantic.ValidationError):
        cfg.api_key = "other"  # type: ignore[misc]
    with pytest.raises(pydantic.ValidationError):
        ProviderConfig(unknown_option=True)  # type: ignore[call-arg]


def test_request_options_timeout_must_be_positive():
    with pytest.raises(pydantic.ValidationError):
        RequestOptions(timeout=0)
    assert RequestOptions().ca_bundle_paths() == []  # nosec B101
    assert RequestOptions(ca_bundle_path="/ca.pem").ca_bundle_paths() == ["/ca.pem"]  # nosec B101
