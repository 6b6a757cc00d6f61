"""Device, action and property descriptors (DTOs)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "ActionDescriptor",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_POLL_INTERVAL_SEC",
    "DEFAULT_SCHEMA_CONTEXT",
    "Device",
    "Parameter",
    "PropertyDescriptor",
    "RequestDescriptor",
    "ValueType",
]

DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"
DEFAULT_POLL_INTERVAL_SEC = 1.0
DEFAULT_SCHEMA_CONTEXT = "https://iot.mozilla.org/schemas/"


class ValueType(str, Enum):
    """Declared type of a polled property value."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(slots=True, frozen=True)
class Parameter:
    """One (name, value) pair of a query string or request body."""

    name: str
    value: str


@dataclass(frozen=True, kw_only=True)
class RequestDescriptor:
    """Declarative description of one HTTP call.

    Attributes:
        url: Absolute target URL.
        method: HTTP method, any case.
        content_type: Body MIME type, only used for POST and PUT.
        query_parameters: Pairs appended to the URL, in order.
        body_parameters: Pairs serialized into the body for POST and PUT.
    """

    url: str
    method: str = "GET"
    content_type: str = DEFAULT_CONTENT_TYPE
    query_parameters: tuple[Parameter, ...] = ()
    body_parameters: tuple[Parameter, ...] = ()


@dataclass(frozen=True, kw_only=True)
class ActionDescriptor(RequestDescriptor):
    """On-demand HTTP call exposed as a named action."""

    name: str
    description: str | None = None
    semantic_type: str | None = None


@dataclass(frozen=True, kw_only=True)
class PropertyDescriptor(RequestDescriptor):
    """Polled HTTP call whose response is coerced and cached.

    The optional metadata (title, description, semantic_type, unit, minimum,
    maximum) is not interpreted by the core and is handed to the host as is.
    """

    name: str
    value_type: ValueType = ValueType.STRING
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SEC
    title: str | None = None
    description: str | None = None
    semantic_type: str | None = None
    unit: str | None = None
    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True, kw_only=True)
class Device:
    """Virtual device owning a fixed set of actions and properties."""

    id: str
    title: str
    capabilities: tuple[str, ...] = ()
    actions: tuple[ActionDescriptor, ...] = ()
    properties: tuple[PropertyDescriptor, ...] = ()
    context: str = DEFAULT_SCHEMA_CONTEXT
