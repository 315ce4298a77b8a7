"""OpenTelemetry implementation of the client instrumentation."""

import io
import re
from typing import BinaryIO
from urllib.parse import urlsplit

import structlog
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind, Status, StatusCode, Tracer, TracerProvider

from opensearch_otel import __version__
from opensearch_otel.instrumentation.protocol import (
    InstrumentedRequest,
    InstrumentedResponse,
)
from opensearch_otel.instrumentation.semconv import (
    ATTR_DB_OPERATION,
    ATTR_DB_STATEMENT,
    ATTR_DB_SYSTEM,
    ATTR_HTTP_REQUEST_METHOD,
    ATTR_SERVER_ADDRESS,
    ATTR_SERVER_PORT,
    ATTR_URL_FULL,
    DB_SYSTEM_OPENSEARCH,
    SCHEMA_URL,
    SEARCH_ENDPOINTS,
    TRACER_NAME,
)

logger = structlog.get_logger()

ERROR_DESCRIPTION = "an error happened while executing a request"

_READ_CHUNK_SIZE = 64 * 1024
_PORT_PATTERN = re.compile(r"[0-9]+")
_INT32_MAX = 2**31 - 1


def _split_authority(netloc: str) -> tuple[str, int | None]:
    """Split a URL authority into host and port.

    User info and IPv6 brackets are stripped and the host keeps its case. The
    port is kept only when it is all digits and fits a 32-bit integer.

    Returns:
        The host (empty if absent) and the port, or None.
    """
    authority = netloc.rpartition("@")[2]
    if authority.startswith("[") and "]" in authority:
        host, _, rest = authority[1:].partition("]")
        raw = rest[1:] if rest.startswith(":") else ""
    else:
        host, _, raw = authority.rpartition(":")
        if not host:
            host, raw = raw, ""

    if not _PORT_PATTERN.fullmatch(raw):
        return host, None
    value = int(raw, 10)
    if value > _INT32_MAX:
        return host, None
    return host, value


class OpenSearchOpenTelemetry:
    """Instrumentation creating OpenTelemetry client spans for OpenSearch calls.

    The instance holds no per-call state: every hook looks the span up in the
    context it is given. One instance can serve a whole client concurrently.
    """

    __slots__ = ("_capture_search_body", "_tracer")

    def __init__(
        self,
        provider: TracerProvider | None = None,
        *,
        capture_search_body: bool = False,
        version: str = __version__,
    ) -> None:
        """Initialize the instrumentation.

        Args:
            provider: Tracer provider to use. Falls back to the global
                OpenTelemetry provider when None.
            capture_search_body: Record request bodies of search endpoints
                as db.statement.
            version: Version reported as the instrumentation version.
        """
        if provider is None:
            provider = trace.get_tracer_provider()
            logger.debug("instrumentation_using_global_provider")
        self._tracer: Tracer = provider.get_tracer(
            TRACER_NAME,
            version,
            schema_url=SCHEMA_URL,
        )
        self._capture_search_body = capture_search_body

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    @property
    def capture_search_body(self) -> bool:
        return self._capture_search_body

    def start(self, ctx: Context | None, operation: str) -> Context:
        """Begin a client span for the operation.

        Args:
            ctx: Parent context, or None for the current context.
            operation: API operation name, used as span name and db.operation.

        Returns:
            Context carrying the new span.
        """
        span = self._tracer.start_span(
            operation,
            context=ctx,
            kind=SpanKind.CLIENT,
            attributes={
                ATTR_DB_SYSTEM: DB_SYSTEM_OPENSEARCH,
                ATTR_DB_OPERATION: operation,
            },
        )
        return trace.set_span_in_context(span, ctx)

    def close(self, ctx: Context | None) -> None:
        """End the span carried by the context."""
        span = trace.get_current_span(ctx)
        if span.is_recording():
            span.end()

    def should_record_request_body(self, endpoint: str) -> bool:
        """Check whether the endpoint body may be recorded."""
        return self._capture_search_body and endpoint in SEARCH_ENDPOINTS

    def record_request_body(
        self, ctx: Context | None, endpoint: str, body: BinaryIO
    ) -> BinaryIO | None:
        """Record the body of search endpoints as db.statement.

        The body is read fully into memory, so large payloads cost their
        size in memory for the duration of the call.

        Args:
            ctx: Context returned by start.
            endpoint: Endpoint identifier.
            body: Readable payload stream.

        Returns:
            A stream over the recorded payload, or None if nothing was read.
        """
        if not self.should_record_request_body(endpoint):
            return None

        span = trace.get_current_span(ctx)
        if not span.is_recording():
            return None

        buffer = bytearray()
        try:
            while chunk := body.read(_READ_CHUNK_SIZE):
                buffer += chunk
        except (OSError, ValueError) as e:
            logger.warning(
                "request_body_read_failed",
                endpoint=endpoint,
                bytes_read=len(buffer),
                error=str(e),
            )

        payload = bytes(buffer)
        span.set_attribute(
            ATTR_DB_STATEMENT, payload.decode("utf-8", errors="replace")
        )
        return io.BytesIO(payload)

    def record_error(self, ctx: Context | None, err: BaseException) -> None:
        """Mark the span as failed and attach the error."""
        span = trace.get_current_span(ctx)
        if span.is_recording():
            span.set_status(Status(StatusCode.ERROR, ERROR_DESCRIPTION))
            span.record_exception(err)

    def before_request(self, request: InstrumentedRequest) -> None:  # noqa: ARG002
        pass

    def after_request(self, request: InstrumentedRequest) -> None:
        """Enrich the span with method, URL, host and port of the request."""
        span = trace.get_current_span(request.context)
        if not span.is_recording():
            return

        url = str(request.url)
        span.set_attributes(
            {
                ATTR_HTTP_REQUEST_METHOD: request.method,
                ATTR_URL_FULL: url,
            }
        )
        try:
            netloc = urlsplit(url).netloc
        except ValueError:
            return

        host, port = _split_authority(netloc)
        span.set_attribute(ATTR_SERVER_ADDRESS, host)
        if port is not None:
            span.set_attribute(ATTR_SERVER_PORT, port)

    def after_response(
        self,
        ctx: Context | None,  # noqa: ARG002
        response: InstrumentedResponse,  # noqa: ARG002
    ) -> None:
        pass
