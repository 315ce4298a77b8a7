"""OpenTelemetry SDK and structlog setup for instrumented clients."""

import logging

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import ParentBasedTraceIdRatio

from opensearch_otel.config import Settings
from opensearch_otel.observability.structlog_processor import add_trace_context

logger = structlog.get_logger()

# Module-level state for cleanup
_tracer_provider: TracerProvider | None = None
_initialized: bool = False


def init_observability(
    service_name: str,
    service_version: str,
    *,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
    enabled: bool = True,
    sample_rate: float = 1.0,
) -> None:
    """Install the global tracer provider and configure structlog.

    Instrumentation created without an explicit provider picks up the
    provider installed here. Calling this more than once is a no-op until
    shutdown_observability() is called.

    Args:
        service_name: Name of the service for resource attribution.
        service_version: Version of the service.
        otlp_endpoint: OTLP/HTTP collector base URL (e.g. "http://localhost:4318").
        console_export: If True, export spans to the console.
        enabled: If False, install a no-op provider so spans never record.
        sample_rate: Sampling ratio between 0.0 and 1.0.
    """
    global _tracer_provider, _initialized

    if _initialized:
        return

    if not enabled:
        trace.set_tracer_provider(trace.NoOpTracerProvider())
        _initialized = True
        return

    resource = Resource.create(
        {
            SERVICE_NAME: service_name,
            SERVICE_VERSION: service_version,
        }
    )
    _tracer_provider = TracerProvider(
        resource=resource, sampler=ParentBasedTraceIdRatio(sample_rate)
    )

    if console_export:
        _tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=f"{otlp_endpoint.rstrip('/')}/v1/traces")
        _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(_tracer_provider)
    configure_logging()

    _initialized = True
    logger.info(
        "observability_initialized",
        service_name=service_name,
        otlp_endpoint=otlp_endpoint,
        sample_rate=sample_rate,
    )


def init_observability_from_settings(settings: Settings) -> None:
    """Initialize observability from instrumentation settings."""
    init_observability(
        settings.service_name,
        settings.service_version,
        otlp_endpoint=settings.otlp_endpoint,
        console_export=settings.console_export,
        enabled=settings.tracing_enabled,
        sample_rate=settings.sample_rate,
    )


def shutdown_observability() -> None:
    """Flush pending spans and shut down the tracer provider.

    Span delivery is best-effort: spans still queued when the exporter
    fails are dropped.
    """
    global _tracer_provider, _initialized

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
        _tracer_provider = None

    _initialized = False


def configure_logging(level: int = logging.INFO) -> None:
    """Configure structlog with trace context injection."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            add_trace_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level)
