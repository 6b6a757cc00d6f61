"""Host port definition (device-management runtime interface)."""

from __future__ import annotations

from typing import Any, Protocol

from httpthings.ports.descriptors import Device

__all__ = ["ActionInvocationPort", "HostPort"]


class HostPort(Protocol):
    """Interface of the external device-management host.

    The core registers every device once at startup and publishes each
    coerced property value after every successful poll.
    """

    def register_device(self, device: Device, /) -> None:
        """Make a device and its actions/properties known to the host."""
        ...

    def publish_property_value(self, device_id: str, property_name: str, value: Any, /) -> None:
        """Store a freshly polled value and notify host subscribers."""
        ...


class ActionInvocationPort(Protocol):
    """One host-issued action request.

    start() and finish() must bracket every invocation exactly once.
    """

    @property
    def name(self) -> str:
        """Name of the requested action."""
        ...

    def start(self) -> None:
        """Mark the invocation as running."""
        ...

    def finish(self) -> None:
        """Mark the invocation as completed."""
        ...
