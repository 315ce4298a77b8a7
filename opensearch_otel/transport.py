"""Request and response descriptors handed to instrumentation hooks."""

from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx
from opentelemetry.context import Context


@dataclass(frozen=True, slots=True)
class TransportRequest:
    """Outgoing request bound to the context of its client call."""

    method: str
    url: str
    context: Context | None = None

    @classmethod
    def from_httpx(
        cls, request: httpx.Request, context: Context | None = None
    ) -> "TransportRequest":
        """Describe an httpx request.

        Args:
            request: The request built by the transport.
            context: Context returned by the instrumentation start hook.

        Returns:
            A descriptor for the request.
        """
        return cls(method=request.method, url=str(request.url), context=context)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Response received for a client call."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "TransportResponse":
        return cls(status_code=response.status_code, headers=dict(response.headers))
