"""Tests for the instrumented() call scope."""

from unittest.mock import MagicMock

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from opensearch_otel.instrumentation import (
    Instrumentation,
    OpenSearchOpenTelemetry,
    instrumented,
)

_exporter = InMemorySpanExporter()
_provider = TracerProvider()
_provider.add_span_processor(SimpleSpanProcessor(_exporter))


@pytest.fixture(autouse=True)
def clear_spans():
    """Clear spans before each test."""
    _exporter.clear()
    yield
    _exporter.clear()


class TestInstrumentedWithDouble:
    """Hook ordering checked against a test double."""

    def test_start_and_close_are_paired(self):
        """start should run on entry and close on exit with the same context."""
        double = MagicMock(spec=Instrumentation)
        call_ctx = trace.set_span_in_context(trace.INVALID_SPAN)
        double.start.return_value = call_ctx

        with instrumented(double, "search") as ctx:
            assert ctx is call_ctx

        double.start.assert_called_once_with(None, "search")
        double.close.assert_called_once_with(call_ctx)
        double.record_error.assert_not_called()

    def test_error_is_recorded_and_reraised(self):
        """An exception should reach record_error and propagate unchanged."""
        double = MagicMock(spec=Instrumentation)
        error = TimeoutError("read timed out")

        with pytest.raises(TimeoutError) as exc_info, instrumented(double, "search"):
            raise error

        assert exc_info.value is error
        ctx = double.start.return_value
        double.record_error.assert_called_once_with(ctx, error)
        double.close.assert_called_once_with(ctx)


class TestInstrumentedWithOpenTelemetry:
    """End-to-end behavior with the OpenTelemetry adapter."""

    def test_successful_call_exports_closed_span(self):
        """A successful block should export one unset-status span."""
        instrumentation = OpenSearchOpenTelemetry(_provider)

        with instrumented(instrumentation, "get") as ctx:
            assert trace.get_current_span(ctx).is_recording()

        spans = _exporter.get_finished_spans()
        assert len(spans) == 1
        assert spans[0].name == "get"
        assert spans[0].status.status_code == StatusCode.UNSET

    def test_failed_call_exports_error_span(self):
        """A failing block should export a span with error status."""
        instrumentation = OpenSearchOpenTelemetry(_provider)

        with pytest.raises(ConnectionError), instrumented(instrumentation, "search"):
            raise ConnectionError("no living connections")

        spans = _exporter.get_finished_spans()
        assert len(spans) == 1
        assert spans[0].status.status_code == StatusCode.ERROR
        assert spans[0].events[0].name == "exception"
