"""Per-device runtime: action dispatch and property pollers."""

import logging
from collections.abc import Awaitable, Callable
from functools import partial
from types import MappingProxyType
from typing import Any

from httpthings.core.action_invoker import ActionInvoker
from httpthings.core.property_poller import PropertyPoller
from httpthings.ports.descriptors import Device
from httpthings.ports.host import ActionInvocationPort, HostPort
from httpthings.ports.http import SendFn

__all__ = ["DeviceRuntime"]

logger = logging.getLogger(__name__)

ActionHandler = Callable[[], Awaitable[None]]


class DeviceRuntime:
    """Live counterpart of one configured device.

    The action handlers and the property pollers are created once, at
    construction, from the device's descriptors and never change afterwards.
    """

    def __init__(
        self,
        device: Device,
        send_fn: SendFn,
        host: HostPort,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the runtime (pollers not started).

        Args:
            device: Validated device record.
            send_fn: Async function used to send one HTTP request.
            host: Receives the published property values.
            log: Diagnostic logger (verbose channel).
        """
        self.device = device
        self._log = log or logger

        invoker = ActionInvoker(send_fn, log=self._log)
        self.handlers: MappingProxyType[str, ActionHandler] = MappingProxyType(
            {action.name: partial(invoker.invoke, action) for action in device.actions}
        )
        self.pollers: MappingProxyType[str, PropertyPoller] = MappingProxyType(
            {
                prop.name: PropertyPoller(
                    prop,
                    send_fn,
                    partial(host.publish_property_value, device.id, prop.name),
                    log=self._log,
                )
                for prop in device.properties
            }
        )

    def start(self) -> None:
        """Start polling every property."""
        for poller in self.pollers.values():
            poller.start()

    async def stop(self) -> None:
        """Stop polling every property."""
        for poller in self.pollers.values():
            await poller.stop()

    def property_value(self, name: str) -> Any:
        """Return the last cached value of a property (None before the first poll).

        Raises:
            KeyError: The device has no such property.
        """
        return self.pollers[name].value

    async def perform_action(self, invocation: ActionInvocationPort) -> None:
        """Run the handler registered under the invocation's name.

        start() and finish() are always reported exactly once, even for
        unknown names or failing requests.

        Args:
            invocation: Host-issued action request.
        """
        invocation.start()
        try:
            handler = self.handlers.get(invocation.name)
            if handler is None:
                self._log.warning(f"Unknown action {invocation.name!r} on device {self.device.id}")
            else:
                await handler()
        finally:
            invocation.finish()
