"""Protocol definitions for client instrumentation."""

from typing import BinaryIO, Protocol, runtime_checkable

from opentelemetry.context import Context


class InstrumentedRequest(Protocol):
    """Outgoing request as seen by the instrumentation.

    The request carries the context it was built under, so hooks that only
    receive the request can still find the active span.
    """

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> str: ...

    @property
    def context(self) -> Context | None: ...


class InstrumentedResponse(Protocol):
    """Response as seen by the instrumentation."""

    @property
    def status_code(self) -> int: ...


@runtime_checkable
class Instrumentation(Protocol):
    """Protocol the transport uses to propagate request information.

    Hooks are called in the order start, before_request, record_request_body,
    after_request, after_response, record_error, close. Any hook other than
    the start/close pair may be skipped by the caller. A context of None
    stands for the current ambient context.
    """

    def start(self, ctx: Context | None, operation: str) -> Context:
        """Create the span before the request is built.

        Args:
            ctx: Parent context.
            operation: Name of the API operation, e.g. "search".

        Returns:
            Context carrying the new span. The transport must use it for the
            rest of the call.
        """
        ...

    def close(self, ctx: Context | None) -> None:
        """End the span once the client call has returned."""
        ...

    def record_error(self, ctx: Context | None, err: BaseException) -> None:
        """Record an error raised while executing the call."""
        ...

    def record_request_body(
        self, ctx: Context | None, endpoint: str, body: BinaryIO
    ) -> BinaryIO | None:
        """Record the request payload.

        Args:
            ctx: Context returned by start.
            endpoint: Endpoint identifier, e.g. "msearch".
            body: Readable payload stream.

        Returns:
            A new stream with the original payload if it was consumed,
            None if the body was left untouched.
        """
        ...

    def before_request(self, request: InstrumentedRequest) -> None:
        """Called with the request before it is sent."""
        ...

    def after_request(self, request: InstrumentedRequest) -> None:
        """Called once the transport has finalized the request."""
        ...

    def after_response(
        self, ctx: Context | None, response: InstrumentedResponse
    ) -> None:
        """Called with the response."""
        ...
