"""Translate request descriptors into concrete HTTP requests."""

import json
from collections.abc import Iterable
from urllib.parse import urlencode, urlsplit, urlunsplit

from httpthings.core.errors import UnsupportedContentTypeError
from httpthings.ports.descriptors import Parameter, RequestDescriptor
from httpthings.ports.http import HttpRequest

__all__ = ["build_request", "FORM_CONTENT_TYPE", "JSON_CONTENT_TYPE"]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"
BODY_METHODS = frozenset({"POST", "PUT"})


def build_request(descriptor: RequestDescriptor) -> HttpRequest:
    """Build the outbound request described by a descriptor.

    Query parameters are appended to the URL for every method. Only POST and
    PUT carry a body and a Content-Type header; other methods ignore
    body parameters entirely.

    Args:
        descriptor: Declarative request description.

    Returns:
        Request ready for the transport. Identical descriptors always
        produce identical requests.

    Raises:
        UnsupportedContentTypeError: POST/PUT with a content type that is
            neither form-urlencoded nor JSON.
    """
    method = descriptor.method.upper()
    url = _append_query(descriptor.url, descriptor.query_parameters)

    if method not in BODY_METHODS:
        return HttpRequest(method=method, url=url)

    body = _encode_body(descriptor.content_type, descriptor.body_parameters)
    return HttpRequest(
        method=method,
        url=url,
        headers={"Content-Type": descriptor.content_type},
        body=body,
    )


def _pairs(params: Iterable[Parameter]) -> list[tuple[str, str]]:
    return [(p.name, p.value) for p in params]


def _append_query(url: str, params: tuple[Parameter, ...]) -> str:
    if not params:
        return url

    parts = urlsplit(url)
    extra = urlencode(_pairs(params))
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunsplit(parts._replace(query=query))


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _encode_body(content_type: str, params: tuple[Parameter, ...]) -> str:
    media_type = _media_type(content_type)

    if media_type == FORM_CONTENT_TYPE:
        return urlencode(_pairs(params))

    if media_type == JSON_CONTENT_TYPE:
        # Object semantics: a repeated name keeps its last value
        return json.dumps(dict(_pairs(params)), separators=(",", ":"))

    raise UnsupportedContentTypeError(content_type)
