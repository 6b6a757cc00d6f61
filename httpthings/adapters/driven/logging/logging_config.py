"""Console logging setup and the verbose diagnostics channel."""

import logging

__all__ = ["configure_logs", "make_verbose_logger", "VERBOSE_LOGGER_NAME"]

VERBOSE_LOGGER_NAME = "httpthings.verbose"


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (httpthings) at INFO level; diagnostics go through
      the verbose logger, which carries its own level.
    - Structured format with timestamp, level, module, and line number.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("httpthings").setLevel(logging.INFO)


def make_verbose_logger(verbose: bool, name: str = VERBOSE_LOGGER_NAME) -> logging.Logger:
    """Return the logger injected into components for HTTP diagnostics.

    When verbose is off the logger is disabled, so every diagnostic
    (outgoing URLs, statuses, timings, failures, unknown actions) is dropped.

    Args:
        verbose: Enable diagnostics.
        name: Logger name.

    Returns:
        The diagnostics logger.
    """
    log = logging.getLogger(name)
    log.setLevel(logging.DEBUG)
    log.disabled = not verbose
    return log
