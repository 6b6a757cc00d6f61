"""Adapter exposing configured HTTP devices to the host."""

import logging
from collections.abc import Iterable

from httpthings.core.device import DeviceRuntime
from httpthings.ports.descriptors import Device
from httpthings.ports.host import ActionInvocationPort, HostPort
from httpthings.ports.http import SendFn

__all__ = ["HttpThingsAdapter"]

logger = logging.getLogger(__name__)


class HttpThingsAdapter:
    """Owns every device runtime for the lifetime of the process.

    Startup sequence:
    1. Build one runtime per device (handlers and pollers fixed from here on).
    2. Register each device with the host.
    3. Start all property pollers.
    """

    def __init__(
        self,
        devices: Iterable[Device],
        send_fn: SendFn,
        host: HostPort,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            devices: Validated devices; ids must be unique.
            send_fn: Async function used to send one HTTP request.
            host: Device-management host.
            log: Diagnostic logger (verbose channel).

        Raises:
            ValueError: Two devices share the same id.
        """
        self.host = host
        self._log = log or logger
        self.runtimes: dict[str, DeviceRuntime] = {}

        for device in devices:
            if device.id in self.runtimes:
                raise ValueError(f"Duplicate device id: {device.id}")
            self.runtimes[device.id] = DeviceRuntime(device, send_fn, host, log=self._log)

    def start(self) -> None:
        """Register devices with the host and start polling."""
        for runtime in self.runtimes.values():
            device = runtime.device
            self.host.register_device(device)
            runtime.start()
            logger.info(
                f"Device {device.id} ({device.title}) ready: "
                f"actions={len(device.actions)}, properties={len(device.properties)}"
            )

    async def stop(self) -> None:
        """Stop all pollers."""
        for runtime in self.runtimes.values():
            await runtime.stop()

    async def perform_action(self, device_id: str, invocation: ActionInvocationPort) -> None:
        """Route a host action request to its device.

        An unknown device is handled like an unknown action: logged, with the
        start/finish lifecycle still reported.

        Args:
            device_id: Target device id.
            invocation: Host-issued action request.
        """
        runtime = self.runtimes.get(device_id)
        if runtime is not None:
            await runtime.perform_action(invocation)
            return

        invocation.start()
        try:
            self._log.warning(f"Unknown device {device_id} for action {invocation.name!r}")
        finally:
            invocation.finish()
