"""On-demand execution of HTTP actions."""

import asyncio
import logging

from aiohttp import ClientError

from httpthings.core.errors import HttpThingsError, TransportFailureError
from httpthings.core.request_builder import build_request
from httpthings.ports.descriptors import ActionDescriptor
from httpthings.ports.http import SendFn

__all__ = ["ActionInvoker"]

logger = logging.getLogger(__name__)


class ActionInvoker:
    """Stateless sender of action requests.

    Each call builds the request, sends it once and discards the response.
    Nothing is retried and nothing is raised to the caller: failures only
    reach the injected logger.
    """

    def __init__(self, send_fn: SendFn, log: logging.Logger | None = None) -> None:
        """Initialize the invoker.

        Args:
            send_fn: Async function used to send one HTTP request.
            log: Diagnostic logger (verbose channel).
        """
        self._send = send_fn
        self._log = log or logger

    async def invoke(self, action: ActionDescriptor) -> None:
        """Send the action's request once.

        Args:
            action: Action to execute.
        """
        try:
            request = build_request(action)
            response = await self._send(request)
            if not response.ok:
                raise TransportFailureError(request.url, response.status, response.reason)
        except (HttpThingsError, ClientError, asyncio.TimeoutError) as e:
            self._log.warning(f"Action {action.name!r} failed: {e}")
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error in action {action.name!r}: {e}", exc_info=True)
