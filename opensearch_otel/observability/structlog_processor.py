"""Structlog processor correlating log events with the active span."""

from typing import Any

from opentelemetry import trace


def add_trace_context(
    logger: Any,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add trace_id and span_id of the current span to the event.

    Events logged while an instrumented call is in flight (for example a
    failed request body read) can then be matched with the call's span.
    Events outside a valid span are returned unchanged.
    """
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return event_dict

    event_dict.setdefault("trace_id", trace.format_trace_id(span_context.trace_id))
    event_dict.setdefault("span_id", trace.format_span_id(span_context.span_id))
    return event_dict
