"""OpenTelemetry instrumentation for OpenSearch client calls."""

__version__ = "0.1.0"
