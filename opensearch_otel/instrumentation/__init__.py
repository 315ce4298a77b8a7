"""Client instrumentation: capability protocol and OpenTelemetry adapter."""

from opensearch_otel.instrumentation.factory import create_instrumentation
from opensearch_otel.instrumentation.otel import OpenSearchOpenTelemetry
from opensearch_otel.instrumentation.protocol import (
    Instrumentation,
    InstrumentedRequest,
    InstrumentedResponse,
)
from opensearch_otel.instrumentation.scope import instrumented
from opensearch_otel.instrumentation.semconv import SEARCH_ENDPOINTS

__all__ = [
    "SEARCH_ENDPOINTS",
    "Instrumentation",
    "InstrumentedRequest",
    "InstrumentedResponse",
    "OpenSearchOpenTelemetry",
    "create_instrumentation",
    "instrumented",
]
