"""Build instrumentation from application settings."""

from opentelemetry.trace import TracerProvider

from opensearch_otel.config import Settings, get_settings
from opensearch_otel.instrumentation.otel import OpenSearchOpenTelemetry


def create_instrumentation(
    settings: Settings | None = None,
    provider: TracerProvider | None = None,
) -> OpenSearchOpenTelemetry:
    """Create the OpenTelemetry instrumentation from settings.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        provider: Tracer provider to inject. The global provider is used
            when None.

    Returns:
        A configured OpenSearchOpenTelemetry instance.
    """
    settings = settings or get_settings()
    return OpenSearchOpenTelemetry(
        provider,
        capture_search_body=settings.capture_search_body,
        version=settings.instrumentation_version,
    )
