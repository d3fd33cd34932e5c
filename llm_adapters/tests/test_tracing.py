from __future__ import annotations

from opentelemetry import trace

from llm_adapters.base.tracing import begin_span, get_tracer, start_span


def test_get_tracer_returns_api_tracer():
    assert isinstance(get_tracer(), trace.Tracer)  # nosec B101


def test_start_span_is_current_inside_block():
    with start_span("llm_adapters.test") as span:
        span.set_attribute("provider", "mock")
        assert trace.get_current_span() is span  # nosec B101


def test_begin_span_is_ended_by_caller():
    span = begin_span("llm_adapters.test.detached")
    span.set_attribute("emitted", 2)
    span.record_exception(RuntimeError("boom"))
    span.end()
