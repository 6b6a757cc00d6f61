"""Periodic polling of HTTP properties."""

import asyncio
import logging
from collections.abc import Callable

from aiohttp import ClientError

from httpthings.core.coercion import PropertyValue, coerce_value
from httpthings.core.errors import HttpThingsError, TransportFailureError
from httpthings.core.request_builder import build_request
from httpthings.ports.descriptors import DEFAULT_POLL_INTERVAL_SEC, PropertyDescriptor
from httpthings.ports.http import SendFn

__all__ = ["PropertyPoller", "PublishFn", "get_now_time"]

logger = logging.getLogger(__name__)

PublishFn = Callable[[PropertyValue], None]


def get_now_time() -> float:
    """Get current monotonic time in seconds.

    Uses event loop's monotonic clock for accurate scheduling
    without wall-clock drift.

    Returns:
        Current time in seconds (monotonic).
    """
    return asyncio.get_running_loop().time()


class PropertyPoller:
    """Fixed-period poller owning the cached value of one property.

    Every period a tick is started as its own task:
    build request -> send -> coerce -> cache -> publish.

    Notes:
        - The loop never awaits individual ticks, so the period stays fixed
          even if the endpoint is slow. Ticks of the same property may
          therefore overlap.
        - A failed tick is a no-op: the previous cached value stays current
          and the next tick is scheduled as usual.
        - Only this poller's ticks write ``value``; no locking is needed on a
          single event loop.
    """

    def __init__(
        self,
        descriptor: PropertyDescriptor,
        send_fn: SendFn,
        publish_fn: PublishFn,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the poller (not started).

        Args:
            descriptor: Property to poll.
            send_fn: Async function used to send one HTTP request.
            publish_fn: Called with every coerced value, changed or not.
            log: Diagnostic logger (verbose channel).
        """
        self.descriptor = descriptor
        self.value: PropertyValue | None = None
        self._send = send_fn
        self._publish = publish_fn
        self._log = log or logger
        self._task: asyncio.Task[None] | None = None
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def interval_sec(self) -> float:
        """Polling period; zero or unset falls back to the default."""
        return self.descriptor.poll_interval_seconds or DEFAULT_POLL_INTERVAL_SEC

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the periodic loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the periodic loop and any in-flight tick."""
        tasks = list(self._pending)
        if self._task is not None:
            tasks.append(self._task)
            self._task = None

        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def poll_once(self) -> None:
        """Run one tick and handle/log errors."""
        prop = self.descriptor
        try:
            request = build_request(prop)
            response = await self._send(request)
            if not response.ok:
                raise TransportFailureError(request.url, response.status, response.reason)
            value = coerce_value(response.text, prop.value_type, self._log)
            self.value = value
            self._publish(value)
        except (HttpThingsError, ClientError, asyncio.TimeoutError) as e:
            self._log.warning(f"Polling property {prop.name!r} failed: {e}")
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error polling property {prop.name!r}: {e}", exc_info=True)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = get_now_time()

        while True:
            next_tick += self.interval_sec
            sleep_duration = max(0, next_tick - get_now_time())
            await asyncio.sleep(sleep_duration)

            # Fire and forget
            task: asyncio.Task[None] = loop.create_task(self.poll_once())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
