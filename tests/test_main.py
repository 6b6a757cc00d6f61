"""Tests for main application entrypoint."""

import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest

from httpthings.main import main
from httpthings.ports.descriptors import Device

__all__ = []


def make_config() -> Mock:
    config = Mock()
    config.verbose = False
    config.to_devices.return_value = [Device(id="d1", title="Lamp")]
    return config


def set_stop_event() -> asyncio.Event:
    stop = asyncio.Event()
    stop.set()
    return stop


@pytest.mark.asyncio
async def test_main_starts_and_stops_adapter() -> None:
    """Main should start the adapter and stop it once the stop event is set."""
    with (
        patch("httpthings.main.configure_logs"),
        patch("httpthings.main.load_settings", return_value=make_config()),
        patch("httpthings.main.HttpClient") as mock_http_client_class,
        patch("httpthings.main.make_stop_on_sigterm", side_effect=set_stop_event),
        patch("httpthings.main.HttpThingsAdapter") as mock_adapter_class,
    ):
        mock_http_client = AsyncMock()
        mock_http_client_class.return_value = mock_http_client
        mock_http_client.__aenter__.return_value = mock_http_client

        adapter = mock_adapter_class.return_value
        adapter.stop = AsyncMock()

        await main()

        assert mock_adapter_class.call_args.kwargs["devices"] == [Device(id="d1", title="Lamp")]
        assert mock_adapter_class.call_args.kwargs["send_fn"] is mock_http_client.send
        adapter.start.assert_called_once_with()
        adapter.stop.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_main_aborts_on_configuration_error() -> None:
    """Main should abort startup if configuration cannot be loaded."""
    with (
        patch("httpthings.main.configure_logs"),
        patch("httpthings.main.load_settings", side_effect=ValueError("bad file")),
        patch("httpthings.main.HttpThingsAdapter") as mock_adapter_class,
        patch("httpthings.main.logger") as mock_logger,
    ):
        await main()

        mock_adapter_class.assert_not_called()
        mock_logger.error.assert_called()


@pytest.mark.asyncio
async def test_main_stops_adapter_on_unexpected_error() -> None:
    """Main should log unexpected errors and still stop the pollers."""
    with (
        patch("httpthings.main.configure_logs"),
        patch("httpthings.main.load_settings", return_value=make_config()),
        patch("httpthings.main.HttpClient") as mock_http_client_class,
        patch("httpthings.main.make_stop_on_sigterm", side_effect=set_stop_event),
        patch("httpthings.main.HttpThingsAdapter") as mock_adapter_class,
        patch("httpthings.main.logger") as mock_logger,
    ):
        mock_http_client = AsyncMock()
        mock_http_client_class.return_value = mock_http_client
        mock_http_client.__aenter__.return_value = mock_http_client

        adapter = mock_adapter_class.return_value
        adapter.start.side_effect = RuntimeError("Test error in start")
        adapter.stop = AsyncMock()

        try:
            await main()
        except RuntimeError:
            pytest.fail("main() should not raise; exceptions are caught internally")

        mock_logger.error.assert_called()
        adapter.stop.assert_awaited_once_with()
