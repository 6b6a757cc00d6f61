"""Configuration loading from environment variables and files."""

import json
import logging
import os
import secrets
from typing import Any

from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from httpthings.ports.descriptors import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_POLL_INTERVAL_SEC,
    DEFAULT_SCHEMA_CONTEXT,
    ActionDescriptor,
    Device,
    Parameter,
    PropertyDescriptor,
    ValueType,
)

__all__ = [
    "ActionConfig",
    "DeviceConfig",
    "PropertyConfig",
    "Settings",
    "load_settings",
]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)

TRUTHY_FLAGS = ("1", "true", "yes", "on")


class _ConfigModel(BaseModel):
    """Base for JSON config records: camelCase keys, snake_case accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ParameterConfig(_ConfigModel):
    """One query or body parameter."""

    name: str = Field(..., min_length=1)
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v: Any) -> Any:
        """Accept JSON numbers and booleans as parameter values."""
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, (int, float)):
            return str(v)
        return v

    def to_parameter(self) -> Parameter:
        return Parameter(name=self.name, value=self.value)


class RequestConfig(_ConfigModel):
    """Fields shared by actions and properties.

    Attributes:
        url: Absolute http(s) URL.
        method: HTTP method, any case.
        content_type: Body MIME type for POST/PUT.
        query_parameters: Pairs appended to the URL.
        body_parameters: Pairs serialized into the body for POST/PUT.
    """

    url: str = Field(..., description="Absolute http(s) URL of the call.")
    method: str = Field(default="GET", min_length=1)
    content_type: str = DEFAULT_CONTENT_TYPE
    query_parameters: list[ParameterConfig] = Field(default_factory=list)
    body_parameters: list[ParameterConfig] = Field(default_factory=list)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that the URL is an absolute HTTP(S) URL.

        Args:
            v: URL to validate.

        Returns:
            The URL, unchanged.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// URLs allowed")
        except Exception as e:
            raise ValueError(f"Invalid URL: {e}") from e
        return v

    def _request_fields(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "method": self.method,
            "content_type": self.content_type,
            "query_parameters": tuple(p.to_parameter() for p in self.query_parameters),
            "body_parameters": tuple(p.to_parameter() for p in self.body_parameters),
        }


class ActionConfig(RequestConfig):
    """Action entry of a device."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    semantic_type: str | None = None

    def to_descriptor(self) -> ActionDescriptor:
        return ActionDescriptor(
            name=self.name,
            description=self.description,
            semantic_type=self.semantic_type,
            **self._request_fields(),
        )


class PropertyConfig(RequestConfig):
    """Property entry of a device."""

    name: str = Field(..., min_length=1)
    value_type: ValueType = ValueType.STRING
    poll_interval_seconds: float = Field(
        default=DEFAULT_POLL_INTERVAL_SEC,
        ge=0,
        description="Seconds between polls; 0 means the default.",
    )
    title: str | None = None
    description: str | None = None
    semantic_type: str | None = None
    unit: str | None = None
    minimum: float | None = None
    maximum: float | None = None

    def to_descriptor(self) -> PropertyDescriptor:
        return PropertyDescriptor(
            name=self.name,
            value_type=self.value_type,
            poll_interval_seconds=self.poll_interval_seconds,
            title=self.title,
            description=self.description,
            semantic_type=self.semantic_type,
            unit=self.unit,
            minimum=self.minimum,
            maximum=self.maximum,
            **self._request_fields(),
        )


class DeviceConfig(_ConfigModel):
    """Device entry of the devices file.

    A missing id is replaced by a random one for the lifetime of the process.
    """

    id: str = Field(default_factory=lambda: secrets.token_hex(16), min_length=1)
    title: str = Field(..., min_length=1)
    capabilities: list[str] = Field(default_factory=list)
    actions: list[ActionConfig] = Field(default_factory=list)
    properties: list[PropertyConfig] = Field(default_factory=list)
    context: str = Field(default=DEFAULT_SCHEMA_CONTEXT, alias="@context")

    @model_validator(mode="before")
    @classmethod
    def name_as_title(cls, data: Any) -> Any:
        """Accept ``name`` as a synonym of ``title``."""
        if isinstance(data, dict) and "title" not in data and "name" in data:
            data = {**data, "title": data["name"]}
        return data

    @model_validator(mode="after")
    def check_unique_names(self) -> "DeviceConfig":
        """Reject duplicate action or property names within the device."""
        for kind, entries in (("action", self.actions), ("property", self.properties)):
            seen: set[str] = set()
            for entry in entries:
                if entry.name in seen:
                    raise ValueError(f"Duplicate {kind} name {entry.name!r} in device {self.id}")
                seen.add(entry.name)
        return self

    def to_device(self) -> Device:
        return Device(
            id=self.id,
            title=self.title,
            capabilities=tuple(self.capabilities),
            actions=tuple(a.to_descriptor() for a in self.actions),
            properties=tuple(p.to_descriptor() for p in self.properties),
            context=self.context,
        )


class Settings(BaseModel):
    """Runtime configuration for the HTTP things service.

    Attributes:
        devices_file_path: Path to JSON file with the device definitions.
        verbose: Log every HTTP call and every failure.
        devices: Device definitions (loaded from file).
    """

    devices_file_path: str = Field(..., description="Path to JSON file containing devices.")
    verbose: bool = Field(default=False, description="Enable diagnostic logging.")
    devices: list[DeviceConfig] = Field(
        default_factory=list,
        description="Device definitions (populated from file).",
    )

    def load_devices(self) -> None:
        """Load and validate devices from JSON file.

        Raises:
            ValueError: If file not found, invalid JSON, wrong format or invalid entries.
        """
        try:
            with open(self.devices_file_path) as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ValueError(f"Devices file not found: {self.devices_file_path}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Devices file contains invalid JSON: {self.devices_file_path}") from e

        if not isinstance(data, dict):
            raise ValueError("Devices file must be a JSON object")
        if not isinstance(data.get("devices"), list):
            raise ValueError("Devices file must contain a 'devices' array")

        # pydantic.ValidationError is a ValueError
        devices = TypeAdapter(list[DeviceConfig]).validate_python(data["devices"])

        ids = [d.id for d in devices]
        if len(ids) != len(set(ids)):
            raise ValueError("Device ids must be unique")

        self.devices = devices
        logger.debug(f"Loaded {len(devices)} devices from {self.devices_file_path}")

    def to_devices(self) -> list[Device]:
        """Convert the loaded entries into core device records."""
        return [d.to_device() for d in self.devices]


def load_settings() -> Settings:
    """Load and validate settings from environment and files.

    Required environment variables:
    - DEVICES_FILE_PATH: Path to JSON file with the devices.

    Optional:
    - VERBOSE: 1/true/yes/on to log every HTTP call.

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars missing.
        ValueError: If configuration is invalid.
    """
    try:
        devices_path = os.environ["DEVICES_FILE_PATH"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    verbose = os.getenv("VERBOSE", "").strip().lower() in TRUTHY_FLAGS

    settings = Settings(devices_file_path=devices_path, verbose=verbose)

    # Load and validate devices file
    settings.load_devices()

    logger.info(
        f"HTTP things configured: devices={len(settings.devices)}, "
        f"actions={sum(len(d.actions) for d in settings.devices)}, "
        f"properties={sum(len(d.properties) for d in settings.devices)}, "
        f"verbose={settings.verbose}"
    )

    return settings
