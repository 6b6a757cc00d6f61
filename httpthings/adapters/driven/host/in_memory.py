"""In-memory host: keeps registered devices and their latest property values."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from httpthings.ports.descriptors import Device
from httpthings.ports.host import HostPort

__all__ = ["ActionInvocation", "InMemoryHost"]

logger = logging.getLogger(__name__)


@dataclass
class ActionInvocation:
    """Host-side record of one action request.

    Attributes:
        name: Requested action name.
        status: "created", then "pending" after start(), "completed" after finish().
        started_at_sec: Monotonic seconds of start(), if reported.
        finished_at_sec: Monotonic seconds of finish(), if reported.
    """

    name: str
    status: str = "created"
    started_at_sec: float | None = None
    finished_at_sec: float | None = None

    def start(self) -> None:
        self.status = "pending"
        self.started_at_sec = time.monotonic()

    def finish(self) -> None:
        self.status = "completed"
        self.finished_at_sec = time.monotonic()


@dataclass
class InMemoryHost(HostPort):
    """Minimal host used by the service entrypoint and tests.

    Values are overwritten on every publish; no history and no persistence.
    """

    devices: dict[str, Device] = field(default_factory=dict)
    values: dict[str, dict[str, Any]] = field(default_factory=dict)
    publish_count: int = 0

    def register_device(self, device: Device) -> None:
        """Remember the device and create its empty value table."""
        self.devices[device.id] = device
        self.values.setdefault(device.id, {})
        logger.info(f"Registered device {device.id} ({device.title})")

    def publish_property_value(self, device_id: str, property_name: str, value: Any) -> None:
        """Store the latest value of a property."""
        self.values.setdefault(device_id, {})[property_name] = value
        self.publish_count += 1
        logger.debug(f"{device_id}.{property_name} = {value!r}")
