"""Application entrypoint."""

import asyncio
import logging

from httpthings.adapters.driven.config.settings import load_settings
from httpthings.adapters.driven.host.in_memory import InMemoryHost
from httpthings.adapters.driven.http.client import HttpClient
from httpthings.adapters.driven.logging.logging_config import (
    configure_logs,
    make_verbose_logger,
)
from httpthings.adapters.driven.metrics.http_metrics import Metrics
from httpthings.adapters.driving.signals import make_stop_on_sigterm
from httpthings.core.adapter import HttpThingsAdapter
from httpthings.ports.settings import SettingsPort

__all__ = ["main"]

logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the HTTP things service.

    Startup sequence:
    1. Configure logging.
    2. Load and validate configuration.
    3. Register the devices with the host and start polling.
    4. Gracefully stop all pollers on SIGTERM.
    """
    configure_logs()
    logger.info("Starting HTTP things service...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check DEVICES_FILE_PATH and that the devices file exists "
            "and is a valid JSON object with a 'devices' array.",
            exc,
        )
        return

    # Wrap config into port so core depends on interface (hexagonal)
    settings_port = SettingsPort(devices=config.to_devices(), verbose=config.verbose)

    verbose_log = make_verbose_logger(settings_port.verbose)
    http_client = HttpClient(metrics=Metrics(), log=verbose_log)

    async with http_client as http:
        adapter = HttpThingsAdapter(
            devices=settings_port.devices,
            send_fn=http.send,
            host=InMemoryHost(),
            log=verbose_log,
        )
        stop = make_stop_on_sigterm()

        try:
            adapter.start()
            await stop.wait()
        except Exception as e:
            logger.error(f"Unhandled exception in HTTP things service: {e}", exc_info=True)
        finally:
            await adapter.stop()

        logger.info("HTTP things service stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutdown requested by user (Ctrl+C).")
