"""Context manager driving the start/close pairing of an instrumented call."""

from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry.context import Context

from opensearch_otel.instrumentation.protocol import Instrumentation


@contextmanager
def instrumented(
    instrumentation: Instrumentation,
    operation: str,
    ctx: Context | None = None,
) -> Iterator[Context]:
    """Run a client call inside an instrumentation span.

    Calls start on entry and close on exit. An exception raised in the block
    is recorded with record_error and re-raised unchanged.

    Args:
        instrumentation: Instrumentation receiving the hooks.
        operation: API operation name, e.g. "search".
        ctx: Parent context, or None for the current context.

    Yields:
        The context returned by start, to pass to the remaining hooks.

    Examples:
        with instrumented(instrumentation, "search") as ctx:
            body = instrumentation.record_request_body(ctx, "search", body) or body
            ...
    """
    call_ctx = instrumentation.start(ctx, operation)
    try:
        yield call_ctx
    except Exception as e:
        instrumentation.record_error(call_ctx, e)
        raise
    finally:
        instrumentation.close(call_ctx)
