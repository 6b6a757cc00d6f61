"""Tests for configuration loading and validation."""

import json
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from httpthings.adapters.driven.config.settings import DeviceConfig, Settings, load_settings
from httpthings.ports.descriptors import Parameter, ValueType

__all__ = []

DEVICES: dict[str, Any] = {
    "devices": [
        {
            "id": "lamp-1",
            "title": "Lamp",
            "capabilities": ["Light", "OnOffSwitch"],
            "actions": [
                {
                    "name": "on",
                    "url": "http://lamp.local/api",
                    "method": "POST",
                    "contentType": "application/json",
                    "queryParameters": [{"name": "token", "value": "abc"}],
                    "bodyParameters": [
                        {"name": "state", "value": "on"},
                        {"name": "level", "value": 80},
                    ],
                }
            ],
            "properties": [
                {
                    "name": "level",
                    "url": "http://lamp.local/level",
                    "valueType": "integer",
                    "pollIntervalSeconds": 5,
                    "unit": "percent",
                    "minimum": 0,
                    "maximum": 100,
                }
            ],
        }
    ]
}


def write_json(data: Any) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(data, f)
        return f.name


@pytest.fixture
def temp_devices_file() -> Iterator[str]:
    """Create temporary JSON devices file for testing.

    Yields:
        Path of the file.
    """
    filepath = write_json(DEVICES)
    yield filepath
    Path(filepath).unlink()


def test_settings_loads_devices_from_file(temp_devices_file: str) -> None:
    """Settings should load and convert devices from the JSON file."""
    settings = Settings(devices_file_path=temp_devices_file)
    settings.load_devices()

    [device] = settings.to_devices()
    [action] = device.actions
    [prop] = device.properties

    assert device.id == "lamp-1"
    assert device.capabilities == ("Light", "OnOffSwitch")
    assert action.content_type == "application/json"
    assert action.query_parameters == (Parameter("token", "abc"),)
    assert action.body_parameters == (Parameter("state", "on"), Parameter("level", "80"))
    assert prop.value_type is ValueType.INTEGER
    assert prop.poll_interval_seconds == 5
    assert (prop.unit, prop.minimum, prop.maximum) == ("percent", 0, 100)


def test_device_defaults() -> None:
    """Missing optional fields should take their defaults."""
    device = DeviceConfig.model_validate(
        {
            "name": "Sensor",
            "properties": [{"name": "raw", "url": "https://sensor.local/raw"}],
        }
    ).to_device()

    [prop] = device.properties
    assert device.title == "Sensor"
    assert len(device.id) == 32
    assert device.context == "https://iot.mozilla.org/schemas/"
    assert prop.method == "GET"
    assert prop.content_type == "application/x-www-form-urlencoded"
    assert prop.value_type is ValueType.STRING
    assert prop.poll_interval_seconds == 1


def test_device_accepts_snake_case_keys() -> None:
    """snake_case keys should be accepted as well as camelCase."""
    device = DeviceConfig.model_validate(
        {
            "title": "Meter",
            "properties": [
                {"name": "w", "url": "http://meter.local/w", "value_type": "number"},
            ],
        }
    ).to_device()

    assert device.properties[0].value_type is ValueType.NUMBER


@pytest.mark.parametrize(
    "entry",
    [
        {"title": "X", "actions": [{"name": "a", "url": "ftp://x.local/"}]},
        {"title": "X", "actions": [{"name": "a", "url": "not a url"}]},
        {"title": "X", "actions": [{"name": "", "url": "http://x.local/"}]},
        {
            "title": "X",
            "actions": [
                {"name": "a", "url": "http://x.local/", "queryParameters": [{"name": "", "value": "1"}]}
            ],
        },
        {"title": "X", "properties": [{"name": "p", "url": "http://x.local/", "valueType": "date"}]},
        {
            "title": "X",
            "properties": [{"name": "p", "url": "http://x.local/", "pollIntervalSeconds": -1}],
        },
        {
            "title": "X",
            "actions": [{"name": "a", "url": "http://x.local/"}, {"name": "a", "url": "http://x.local/"}],
        },
        {"actions": []},
    ],
)
def test_device_rejects_invalid_entries(entry: dict[str, Any]) -> None:
    """Invalid device entries should be rejected."""
    with pytest.raises(ValueError):
        DeviceConfig.model_validate(entry)


def test_settings_rejects_missing_devices_file() -> None:
    """Settings should reject non-existent devices file."""
    settings = Settings(devices_file_path="/nonexistent/file.json")

    with pytest.raises(ValueError, match="not found"):
        settings.load_devices()


def test_settings_rejects_invalid_json_file() -> None:
    """Settings should reject invalid JSON in devices file."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        f.write("{ invalid json }")
        filepath = f.name

    try:
        settings = Settings(devices_file_path=filepath)
        with pytest.raises(ValueError, match="invalid JSON"):
            settings.load_devices()
    finally:
        Path(filepath).unlink()


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ([], "must be a JSON object"),
        ({"actions": []}, "must contain a 'devices' array"),
        (
            {"devices": [{"id": "a", "title": "A"}, {"id": "a", "title": "B"}]},
            "ids must be unique",
        ),
    ],
)
def test_settings_rejects_malformed_devices_file(data: Any, message: str) -> None:
    """Settings should reject files without a valid devices array."""
    filepath = write_json(data)

    try:
        settings = Settings(devices_file_path=filepath)
        with pytest.raises(ValueError, match=message):
            settings.load_devices()
    finally:
        Path(filepath).unlink()


@pytest.mark.parametrize(("flag", "expected"), [("true", True), ("1", True), ("no", False)])
def test_settings_load_settings_success(
    monkeypatch: pytest.MonkeyPatch, temp_devices_file: str, flag: str, expected: bool
) -> None:
    """Load Settings should create Settings object when the input is valid."""
    monkeypatch.setenv("DEVICES_FILE_PATH", temp_devices_file)
    monkeypatch.setenv("VERBOSE", flag)

    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.verbose is expected
    assert len(settings.devices) == 1


def test_settings_load_settings_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load Settings should raise when the devices file is not configured."""
    monkeypatch.delenv("DEVICES_FILE_PATH", raising=False)

    with pytest.raises(RuntimeError, match="DEVICES_FILE_PATH"):
        load_settings()
