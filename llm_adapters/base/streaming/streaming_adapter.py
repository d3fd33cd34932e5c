"""Generic streaming engine shared by every HTTP adapter.

``BaseStreamingAdapter`` owns the lifecycle of one streaming call:

1. Check the cancellation token, then call ``starter`` to open the vendor
   response. Failures here raise (``TransportError``/``UpstreamError``).
   A ``None`` response means the vendor reported the caller-aborted status
   and the stream ends empty.
2. Register ``response.close`` with the token so a cancel from another
   thread unblocks a pending read.
3. Frame the body into SSE events and feed them to the vendor decoder,
   yielding content chunks as they are produced.
4. Yield the decoder's single terminal usage chunk.
5. Always close the response, unregister the callback, end the span and log
   ``stream.end`` / ``stream.cancelled`` / ``stream.error``.

Cancellation after the response exists never raises: the stream just stops.
Every other failure propagates from the iterator as a ``ProviderError``.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Iterator, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, ProviderError, TransportError, transport_error_from
from ..http.sse import ServerSentEvent, iter_sse_response
from ..logging import LogContext, normalized_log_event
from ..models import ChatCompletionChunk
from ..tracing import begin_span
from .decoder import StreamDecoder
from .streaming_metrics import StreamMetrics, apply_token_usage

StreamStarter = Callable[[], Optional[httpx.Response]]
EventReader = Callable[[httpx.Response], Iterable[ServerSentEvent]]


class BaseStreamingAdapter:
    """Encapsulates the provider-agnostic streaming loop."""

    def __init__(
        self,
        *,
        ctx: LogContext,
        provider_name: str,
        model: str,
        starter: StreamStarter,
        decoder: StreamDecoder,
        logger: logging.Logger,
        cancellation_token: Optional[CancellationToken] = None,
        read_events: EventReader = iter_sse_response,
    ) -> None:
        self.ctx = ctx
        self.provider_name = provider_name
        self.model = model
        self._starter = starter
        self._decoder = decoder
        self._logger = logger
        self._cancellation_token = cancellation_token
        self._read_events = read_events
        self.metrics = StreamMetrics()
        self._t0 = 0.0

    @property
    def cancelled(self) -> bool:
        return self._cancellation_token is not None and self._cancellation_token.cancelled

    def run(self) -> Iterator[ChatCompletionChunk]:
        """Execute the streaming lifecycle (lazy; nothing happens until iterated)."""
        self._t0 = time.perf_counter()
        span = begin_span("llm_adapters.stream.run")
        span.set_attribute("provider", self.provider_name)
        span.set_attribute("model", self.model)
        normalized_log_event(self._logger, "stream.start", self.ctx, phase="start", attempt=1, emitted=None)
        try:
            response = self._open()
            if response is None:
                self._log_end("aborted")
                return
            yield from self._consume(response)
        except ProviderError as exc:
            span.record_exception(exc)
            self._log_error(exc)
            raise
        finally:
            span.set_attribute("emitted", self.metrics.emitted)
            span.set_attribute("cancelled", self.metrics.cancelled)
            span.end()

    def _open(self) -> Optional[httpx.Response]:
        """Run the starter, mapping setup cancellation to ``TransportError``."""
        try:
            if self._cancellation_token is not None:
                self._cancellation_token.raise_if_cancelled()
            response = self._starter()
        except CancelledError as exc:
            raise TransportError(
                message=str(exc),
                provider=self.provider_name,
                model=self.model,
                code=ErrorCode.CANCELLED,
                retryable=False,
            ) from exc
        if response is not None and self.cancelled:
            # cancelled while the request was in flight
            response.close()
            self._mark_cancelled()
            return None
        return response

    def _consume(self, response: httpx.Response) -> Iterator[ChatCompletionChunk]:
        unregister: Optional[Callable[[], None]] = None
        if self._cancellation_token is not None:
            unregister = self._cancellation_token.on_cancel(response.close)
        try:
            for event in self._read_events(response):
                if self.cancelled:
                    self._mark_cancelled()
                    return
                for chunk in self._decoder.feed(event):
                    self._record_emit()
                    yield chunk
                    if self.cancelled:
                        self._mark_cancelled()
                        return
                if self._decoder.done:
                    break
            if self.cancelled:
                self._mark_cancelled()
                return
            terminal = self._decoder.finish()
            apply_token_usage(self.metrics, terminal.usage)  # type: ignore[arg-type]
            self._log_end("finalize")
            yield terminal
        except (httpx.TransportError, httpx.StreamError) as exc:
            if self.cancelled:
                self._mark_cancelled()
                return
            raise transport_error_from(exc, provider=self.provider_name, model=self.model) from exc
        finally:
            if unregister is not None:
                unregister()
            response.close()

    def _record_emit(self) -> None:
        if self.metrics.emitted == 0:
            self.metrics.time_to_first_token_ms = (time.perf_counter() - self._t0) * 1000.0
        self.metrics.emitted += 1

    def _mark_cancelled(self) -> None:
        self.metrics.cancelled = True
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        reason = self._cancellation_token.reason if self._cancellation_token is not None else None
        normalized_log_event(
            self._logger,
            "stream.cancelled",
            self.ctx,
            phase="cancelled",
            attempt=1,
            error_code=ErrorCode.CANCELLED.value,
            emitted=self.metrics.emitted,
            reason=reason,
        )

    def _log_end(self, phase: str) -> None:
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        normalized_log_event(
            self._logger,
            "stream.end",
            self.ctx,
            phase=phase,
            attempt=1,
            emitted=self.metrics.emitted,
            tokens=self.metrics.tokens(),
            metrics=self.metrics.to_dict(),
        )

    def _log_error(self, exc: ProviderError) -> None:
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        normalized_log_event(
            self._logger,
            "stream.error",
            self.ctx,
            phase="error",
            attempt=1,
            error_code=exc.code.value,
            emitted=self.metrics.emitted,
            level=logging.WARNING,
            error=exc.message,
        )


__all__ = ["BaseStreamingAdapter", "StreamStarter", "EventReader"]
