"""Thin tracing facade over ``opentelemetry-api``.

Adapters annotate calls and stream lifecycles through :func:`start_span`.
Without an SDK installed by the host process the API package hands out
non-recording spans, so instrumentation costs nothing and needs no setup
here.
"""
from __future__ import annotations

from opentelemetry import trace

TRACER_NAME = "llm_adapters"


def get_tracer(service_name: str = TRACER_NAME) -> trace.Tracer:
    """Return the tracer registered for ``service_name``."""
    return trace.get_tracer(service_name)


def start_span(name: str, *, service_name: str = TRACER_NAME):
    """Start a span and make it current for the duration of a ``with`` block.

    Usage:

        with start_span("llm_adapters.stream") as span:
            span.set_attribute("provider", "anthropic")
    """
    return get_tracer(service_name).start_as_current_span(name)


def begin_span(name: str, *, service_name: str = TRACER_NAME) -> trace.Span:
    """Start a span without attaching it to the current context.

    Generators must use this instead of :func:`start_span`: a context token
    attached before a ``yield`` cannot be detached safely when the consumer
    closes the generator from another frame. The caller ends the span.
    """
    return get_tracer(service_name).start_span(name)


__all__ = ["get_tracer", "start_span", "begin_span"]
