"""OpenTelemetry SDK wiring and structlog integration."""

from opensearch_otel.observability.setup import (
    configure_logging,
    init_observability,
    init_observability_from_settings,
    shutdown_observability,
)
from opensearch_otel.observability.structlog_processor import add_trace_context

__all__ = [
    "add_trace_context",
    "configure_logging",
    "init_observability",
    "init_observability_from_settings",
    "shutdown_observability",
]
