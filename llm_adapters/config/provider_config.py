"""Typed provider configuration captured at client construction.

Purpose
-------
Carry everything a client needs to talk to one vendor: credential, endpoint
root, transport options, caching strategy and vendor-specific extras. The
models are frozen so a client's configuration cannot change after it is
built, and nothing here reads the process environment: whoever assembles
the configuration (files, env, UI) does so outside this package and passes
the result in.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation. Both snake_case field names and
  the camelCase spellings used by JSON config files (``apiKey``,
  ``requestOptions.caBundlePath``...) are accepted.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def normalize_api_base(url: str) -> str:
    """Return ``url`` with exactly one trailing ``/`` appended if missing."""
    return url if url.endswith("/") else url + "/"


class _FrozenConfig(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ClientCertificate(_FrozenConfig):
    """Client certificate for mutual TLS.

    Attributes
    ----------
    cert:
        Path to the PEM certificate (may also contain the key).
    key:
        Optional path to the PEM private key.
    passphrase:
        Optional passphrase for an encrypted key.
    """

    cert: str
    key: Optional[str] = None
    passphrase: Optional[str] = None


class RequestOptions(_FrozenConfig):
    """Transport options applied to every HTTP call of one client.

    Attributes
    ----------
    timeout:
        Seconds before the HTTP call is aborted. ``None`` means the package
        default (a multi-hour ceiling, see ``DEFAULT_REQUEST_TIMEOUT_SECONDS``).
    proxy:
        Proxy URL all traffic is routed through.
    no_proxy:
        Hostnames that bypass ``proxy``.
    headers:
        Extra headers merged into every request (they win over defaults).
    verify_ssl:
        ``False`` disables certificate verification.
    ca_bundle_path:
        One or more PEM files with additional trusted CAs.
    client_certificate:
        Certificate presented for mutual TLS.
    """

    timeout: Optional[float] = Field(default=None, gt=0)
    proxy: Optional[str] = None
    no_proxy: List[str] = Field(default_factory=list)
    headers: Dict[str, str] = Field(default_factory=dict)
    verify_ssl: bool = True
    ca_bundle_path: Optional[Union[str, List[str]]] = None
    client_certificate: Optional[ClientCertificate] = None

    def ca_bundle_paths(self) -> List[str]:
        if self.ca_bundle_path is None:
            return []
        if isinstance(self.ca_bundle_path, str):
            return [self.ca_bundle_path]
        return list(self.ca_bundle_path)


class ProviderConfig(_FrozenConfig):
    """Configuration for one provider client.

    Attributes
    ----------
    api_key:
        Credential attached per the vendor's auth convention.
    api_base:
        Endpoint root override; always normalized to end with ``/``. When
        unset the factory fills in the provider's default.
    request_options:
        Transport options (timeout, proxy, TLS, headers).
    caching_strategy:
        Prompt-caching strategy name for vendors that support it.
    region, profile, engine, api_version:
        Vendor-specific extras; ignored by adapters that do not use them.
    extra:
        Free-form vendor-specific bag.
    """

    api_key: Optional[str] = None
    api_base: Optional[str] = None
    request_options: RequestOptions = Field(default_factory=RequestOptions)
    caching_strategy: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    engine: Optional[str] = None
    api_version: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("api_base")
    @classmethod
    def _normalize_api_base(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return normalize_api_base(value.strip())

    def with_default_api_base(self, default: str) -> "ProviderConfig":
        """Return this config, or a copy with ``api_base`` set to ``default``."""
        if self.api_base is not None:
            return self
        return self.model_copy(update={"api_base": normalize_api_base(default)})


__all__ = [
    "ClientCertificate",
    "RequestOptions",
    "ProviderConfig",
    "normalize_api_base",
]
