"""HTTP client construction for adapter clients.

Purpose:
    Turn a :class:`RequestOptions` value into a configured ``httpx.Client``.
    Each adapter client builds exactly one ``httpx.Client`` at construction
    and reuses it for every call, so connection pooling happens per client
    and the transport configuration is immutable for the client's lifetime.

External dependencies:
    - ``httpx`` for the synchronous HTTP client and transports.
    - ``ssl`` (stdlib) for CA bundle and client certificate contexts.

Timeout strategy:
    - One ``httpx.Timeout`` applies to connect, read, write and pool waits.
      It defaults to ``DEFAULT_REQUEST_TIMEOUT_SECONDS`` (two hours) so long
      generations are never cut off unless the caller asks for it. Exceeding
      it surfaces as ``TransportError(code=timeout)``.

Proxy handling:
    - ``proxy`` is mounted for every scheme; each ``no_proxy`` host is
      mounted with ``None`` which routes it through the default transport.
    - ``trust_env`` is disabled: proxy and CA settings come from
      ``RequestOptions`` only, never from ambient environment variables.
"""

from __future__ import annotations

import ssl
from typing import Dict, Optional, Union

import httpx

from ..constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from ...config.provider_config import RequestOptions


def build_ssl_verify(options: RequestOptions) -> Union[bool, ssl.SSLContext]:
    """Return the ``verify`` argument for httpx derived from TLS options.

    Plain ``True``/``False`` is returned when no CA bundle or client
    certificate is configured; otherwise an ``SSLContext`` carrying them.
    """
    cas = options.ca_bundle_paths()
    cert = options.client_certificate
    if not cas and cert is None:
        return options.verify_ssl
    ctx = ssl.create_default_context()
    if not options.verify_ssl:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    for path in cas:
        ctx.load_verify_locations(cafile=path)
    if cert is not None:
        ctx.load_cert_chain(certfile=cert.cert, keyfile=cert.key, password=cert.passphrase)
    return ctx


def _no_proxy_pattern(host: str) -> str:
    host = host.strip()
    if host.startswith("."):
        return f"all://*{host}"
    return f"all://{host}"


def build_mounts(
    options: RequestOptions,
    verify: Union[bool, ssl.SSLContext],
) -> Optional[Dict[str, Optional[httpx.BaseTransport]]]:
    """Return httpx transport mounts for the proxy settings (``None`` if no proxy)."""
    if not options.proxy:
        return None
    mounts: Dict[str, Optional[httpx.BaseTransport]] = {
        "all://": httpx.HTTPTransport(proxy=options.proxy, verify=verify),
    }
    for host in options.no_proxy:
        if host.strip():
            mounts[_no_proxy_pattern(host)] = None
    return mounts


def build_timeout(options: RequestOptions) -> httpx.Timeout:
    return httpx.Timeout(options.timeout or DEFAULT_REQUEST_TIMEOUT_SECONDS)


def build_http_client(
    options: RequestOptions,
    *,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the ``httpx.Client`` an adapter client uses for all calls.

    Parameters:
        options: Transport options captured from ``ProviderConfig``.
        transport: Optional transport override (e.g. ``httpx.MockTransport``
            in tests). When given, proxy mounts are not installed.

    Returns:
        A new ``httpx.Client``; the owning adapter closes it.
    """
    verify = build_ssl_verify(options)
    kwargs: Dict[str, object] = {
        "timeout": build_timeout(options),
        "verify": verify,
        "trust_env": False,
    }
    if transport is not None:
        kwargs["transport"] = transport
    else:
        mounts = build_mounts(options, verify)
        if mounts is not None:
            kwargs["mounts"] = mounts
    return httpx.Client(**kwargs)  # type: ignore[arg-type]


__all__ = ["build_http_client", "build_ssl_verify", "build_mounts", "build_timeout"]
