"""Configuration check for container orchestration."""

import logging

from httpthings.adapters.driven.config.settings import load_settings
from httpthings.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Validate the devices configuration without starting any poller.

    Validates:
    - Required environment variables are set.
    - Devices file exists, is valid JSON and every device entry is valid.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
    except Exception as exc:
        logger.error(f"HTTP things config check FAILED: {exc}")
        return 1

    logger.info(f"HTTP things config check OK ({len(settings.devices)} devices)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
