"""Domain-specific errors for the HTTP things core."""

__all__ = ["HttpThingsError", "TransportFailureError", "UnsupportedContentTypeError"]


class HttpThingsError(Exception):
    """Base error for the HTTP things core."""


class UnsupportedContentTypeError(HttpThingsError):
    """Raised when a POST/PUT descriptor names a content type with no body encoding."""

    def __init__(self, content_type: str) -> None:
        super().__init__(f"Unsupported content type: {content_type!r}")
        self.content_type = content_type


class TransportFailureError(HttpThingsError):
    """Raised when an HTTP call answers with a non-2xx status."""

    def __init__(self, url: str, status: int, reason: str) -> None:
        super().__init__(f"{url} answered {status} {reason}")
        self.url = url
        self.status = status
        self.reason = reason
