"""HTTP port definition (DTOs and transport signature)."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

__all__ = ["HttpRequest", "HttpResponse", "SendFn"]

FIRST_FAILING_HTTP_CODE = 300


@dataclass(frozen=True)
class HttpRequest:
    """Concrete HTTP request built from a descriptor.

    Decouples core request building from HTTP implementation details.

    Attributes:
        method: Upper-cased HTTP method.
        url: Final URL including the query string.
        headers: Request headers (only Content-Type is ever set by the core).
        body: Serialized body, None when the method carries no body.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None


@dataclass(frozen=True)
class HttpResponse:
    """Textual HTTP response as seen by the core.

    Attributes:
        status: HTTP status code.
        reason: Status text.
        text: Response body decoded as text.
    """

    status: int
    reason: str
    text: str

    @property
    def ok(self) -> bool:
        """Return True for 2xx statuses."""
        return 200 <= self.status < FIRST_FAILING_HTTP_CODE


# Transport contract: send one request, read the whole body as text.
SendFn = Callable[[HttpRequest], Awaitable[HttpResponse]]
