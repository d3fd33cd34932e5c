"""HTTP utilities package for adapters.

Exposes the per-client ``httpx.Client`` builder and the SSE framing parser.
"""

from .client import build_http_client
from .sse import ServerSentEvent, iter_sse, iter_sse_response

__all__ = ["build_http_client", "ServerSentEvent", "iter_sse", "iter_sse_response"]
