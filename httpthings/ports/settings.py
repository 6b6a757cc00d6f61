"""Settings port definition (DTO)."""

from dataclasses import dataclass, field

from httpthings.ports.descriptors import Device

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for the core.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        devices: Devices to expose, already validated.
        verbose: Enable diagnostic logging of every HTTP call.
    """

    devices: list[Device] = field(default_factory=list)
    verbose: bool = False
