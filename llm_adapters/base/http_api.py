"""Shared HTTP plumbing for adapter clients.

Purpose:
    ``BaseHttpApi`` owns the pieces every HTTP-backed adapter needs: the
    frozen ``ProviderConfig``, one ``httpx.Client`` built from its request
    options, URL joining against ``api_base``, header merging, the
    caller-aborted (499) rule and mapping of transport failures onto the
    canonical taxonomy. Vendor subclasses add translation and decoding.

Timeout strategy:
    Enforced by the ``httpx.Client`` timeout (``RequestOptions.timeout``).
    A timeout surfaces as ``TransportError(code=timeout)``.

Cancellation:
    Tokens are checked before a request is sent. While a non-streaming body
    is being read, ``response.close`` is registered with the token so a
    cancel from another thread interrupts the read; the call then raises
    ``TransportError(code=cancelled)``. Streams are handled by
    ``BaseStreamingAdapter`` and end quietly instead.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import httpx

from .cancellation import CancellationToken
from .constants import ABORTED_BY_CALLER_STATUS
from .errors import (
    ErrorCode,
    ProtocolError,
    ProviderError,
    TransportError,
    UnsupportedOperationError,
    raise_for_upstream,
    transport_error_from,
)
from .http import build_http_client
from .logging import LogContext, get_logger, normalized_log_event
from .models import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    Completion,
    CompletionRequest,
    EmbeddingRequest,
    EmbeddingResponse,
    ModelInfo,
    RerankRequest,
    RerankResponse,
)
from .streaming import BaseStreamingAdapter, StreamDecoder
from .tracing import start_span
from ..config import ProviderConfig


class BaseHttpApi:
    """Base class for clients speaking a vendor HTTP API.

    Subclasses set ``_default_api_base`` (or pass ``default_api_base``) and
    override ``_default_headers`` plus the operations they support. Every
    operation not overridden raises ``UnsupportedOperationError``.
    """

    _default_api_base: str = ""

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        provider_name: str,
        default_api_base: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        config = config or ProviderConfig()
        base = default_api_base or self._default_api_base
        if base:
            config = config.with_default_api_base(base)
        self._config = config
        self._provider_name = provider_name
        self._logger = get_logger(f"adapters.{provider_name}")
        self._owns_client = http_client is None
        self._http = http_client or build_http_client(config.request_options, transport=transport)

    # ----- identity & lifecycle -----
    @property
    def provider_name(self) -> str:
        return self._provider_name

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def api_base(self) -> str:
        return self._config.api_base or ""

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "BaseHttpApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ----- request building -----
    def _default_headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Accept": "application/json"}

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Merge vendor defaults, ``extra`` and user headers (user headers win)."""
        headers = dict(self._default_headers())
        if extra:
            headers.update(extra)
        headers.update(self._config.request_options.headers)
        return headers

    def _url(self, path: str) -> str:
        return self.api_base + path.lstrip("/")

    def _ctx(self, model: Optional[str], operation: str, endpoint: Optional[str] = None) -> LogContext:
        return LogContext(provider=self._provider_name, model=model, operation=operation, endpoint=endpoint)

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            message=f"{operation} is not supported by provider '{self._provider_name}'",
            provider=self._provider_name,
        )

    # ----- transport -----
    def _cancelled_error(self, token: CancellationToken, model: Optional[str]) -> TransportError:
        return TransportError(
            message=token.reason or "operation cancelled",
            provider=self._provider_name,
            model=model,
            code=ErrorCode.CANCELLED,
            retryable=False,
        )

    def _send(
        self,
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        model: Optional[str] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Optional[httpx.Response]:
        """Send a request and return the open (unread) response.

        Returns ``None`` for the caller-aborted status. Any other non-success
        status raises ``UpstreamError``; network failures raise
        ``TransportError``.
        """
        if cancellation_token is not None and cancellation_token.cancelled:
            raise self._cancelled_error(cancellation_token, model)
        request = self._http.build_request(
            method,
            self._url(path),
            headers=self._headers(headers),
            content=json.dumps(body) if body is not None else None,
        )
        try:
            response = self._http.send(request, stream=True)
        except httpx.TransportError as exc:
            raise transport_error_from(exc, provider=self._provider_name, model=model) from exc
        if response.status_code == ABORTED_BY_CALLER_STATUS:
            response.close()
            return None
        try:
            raise_for_upstream(response, provider=self._provider_name, model=model)
        except ProviderError:
            response.close()
            raise
        return response

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Optional[Any]:
        """Perform a non-streaming call and decode its JSON body.

        Returns ``None`` when the vendor answered with the caller-aborted
        status.
        """
        response = self._send(method, path, body=body, model=model, cancellation_token=cancellation_token)
        if response is None:
            return None
        unregister: Optional[Callable[[], None]] = None
        if cancellation_token is not None:
            unregister = cancellation_token.on_cancel(response.close)
        try:
            response.read()
        except (httpx.TransportError, httpx.StreamError) as exc:
            if cancellation_token is not None and cancellation_token.cancelled:
                raise self._cancelled_error(cancellation_token, model) from exc
            raise transport_error_from(exc, provider=self._provider_name, model=model) from exc
        finally:
            if unregister is not None:
                unregister()
            response.close()
        if cancellation_token is not None and cancellation_token.cancelled:
            raise self._cancelled_error(cancellation_token, model)
        try:
            return response.json()
        except ValueError as exc:
            raise ProtocolError(
                message=f"response body is not JSON: {exc}",
                provider=self._provider_name,
                model=model,
                raw=response.text,
            ) from exc

    def _post_json(
        self,
        path: str,
        body: Dict[str, Any],
        *,
        model: Optional[str] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Optional[Any]:
        return self._request_json("POST", path, body=body, model=model, cancellation_token=cancellation_token)

    def _stream(
        self,
        path: str,
        body: Dict[str, Any],
        *,
        model: str,
        decoder: StreamDecoder,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[ChatCompletionChunk]:
        """Run a streaming POST through ``BaseStreamingAdapter`` (lazy)."""

        def _starter() -> Optional[httpx.Response]:
            return self._send(
                "POST",
                path,
                body=body,
                headers={"Accept": "text/event-stream"},
                model=model,
                cancellation_token=cancellation_token,
            )

        adapter = BaseStreamingAdapter(
            ctx=self._ctx(model, "stream", path),
            provider_name=self._provider_name,
            model=model,
            starter=_starter,
            decoder=decoder,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )
        return adapter.run()

    def _run_non_stream(self, event: str, model: Optional[str], call: Callable[[], Any]) -> Any:
        """Wrap a non-streaming operation with span and ``chat.*`` log events."""
        ctx = self._ctx(model, event)
        normalized_log_event(self._logger, f"{event}.start", ctx, phase="start", attempt=1)
        with start_span(f"llm_adapters.{event}") as span:
            span.set_attribute("provider", self._provider_name)
            if model:
                span.set_attribute("model", model)
            try:
                result = call()
            except ProviderError as exc:
                span.record_exception(exc)
                normalized_log_event(
                    self._logger,
                    f"{event}.error",
                    ctx,
                    phase="error",
                    attempt=1,
                    error_code=exc.code.value,
                    level=logging.WARNING,
                    error=exc.message,
                )
                raise
        usage = getattr(result, "usage", None)
        normalized_log_event(self._logger, f"{event}.end", ctx, phase="finalize", attempt=1, tokens=usage)
        return result

    # ----- canonical contract (unsupported by default) -----
    def chat_completion_non_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> ChatCompletion:
        raise self._unsupported("chat_completion_non_stream")

    def chat_completion_stream(
        self, request: ChatCompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        raise self._unsupported("chat_completion_stream")

    def completion_non_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Completion:
        raise self._unsupported("completion_non_stream")

    def completion_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        raise self._unsupported("completion_stream")

    def fim_stream(
        self, request: CompletionRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> Iterator[ChatCompletionChunk]:
        raise self._unsupported("fim_stream")

    def embed(
        self, request: EmbeddingRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> EmbeddingResponse:
        raise self._unsupported("embed")

    def rerank(
        self, request: RerankRequest, *, cancellation_token: Optional[CancellationToken] = None
    ) -> RerankResponse:
        raise self._unsupported("rerank")

    def list_models(self, *, cancellation_token: Optional[CancellationToken] = None) -> List[ModelInfo]:
        raise self._unsupported("list_models")


__all__ = ["BaseHttpApi"]
