"""Configuration surface for adapter clients.

``ProviderConfig`` is the only way configuration reaches a client; see
``provider_config`` for the option semantics and ``defaults`` for the
per-vendor endpoint roots.
"""

from .provider_config import ClientCertificate, ProviderConfig, RequestOptions, normalize_api_base

__all__ = ["ClientCertificate", "ProviderConfig", "RequestOptions", "normalize_api_base"]
