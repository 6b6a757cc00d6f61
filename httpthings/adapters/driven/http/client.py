"""HTTP client adapter with diagnostics and metrics integration."""

import asyncio
import logging
from types import TracebackType

import aiohttp

from httpthings.ports.http import HttpRequest, HttpResponse
from httpthings.ports.metrics import HttpAttemptDto, MetricsPort

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)


class HttpClient:
    """aiohttp implementation of the HTTP transport port.

    Features:
    - One shared session, closed by the async context manager.
    - Verbose logging of URL, status and elapsed time of every call.
    - Metrics collection (latency, failure rate).

    No retry, timeout or redirect policy is added on top of aiohttp's
    defaults.
    """

    def __init__(
        self,
        metrics: MetricsPort | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            metrics: Optional metrics collector to track attempts.
            log: Diagnostic logger (verbose channel).
        """
        self.metrics = metrics
        self.session: aiohttp.ClientSession | None = None
        self._log = log or logger

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def _raw_send(self, req: HttpRequest) -> HttpResponse:
        """Single HTTP request, body read as text.

        Args:
            req: Request built by the core.

        Returns:
            Status, reason and decoded body.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Network/timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        async with self.session.request(
            req.method,
            req.url,
            headers=req.headers,
            data=req.body,
        ) as resp:
            # Lossy decode: an undeclared or wrong charset must not fail the call
            text = await resp.text(errors="replace")
            return HttpResponse(status=resp.status, reason=resp.reason or "", text=text)

    async def send(self, req: HttpRequest) -> HttpResponse:
        """Send HTTP request, log it and record metrics.

        Args:
            req: Request built by the core.

        Returns:
            HTTP response.
        """
        loop = asyncio.get_running_loop()
        self._log.info(f"{req.method} {req.url}")
        started = loop.time()

        try:
            resp = await self._raw_send(req)
        except Exception:
            self._record(started, loop.time(), is_failed=True, status_code=None)
            raise

        finished = loop.time()
        self._log.info(
            f"{req.method} {req.url} -> {resp.status} {resp.reason} "
            f"({(finished - started) * 1_000.0:.1f} ms)"
        )
        self._record(started, finished, is_failed=not resp.ok, status_code=resp.status)
        return resp

    def _record(
        self,
        started: float,
        finished: float,
        *,
        is_failed: bool,
        status_code: int | None,
    ) -> None:
        if not self.metrics:
            return
        self.metrics.update(
            HttpAttemptDto(
                started_at_sec=started,
                finished_at_sec=finished,
                is_failed=is_failed,
                status_code=status_code,
            )
        )
        self._log.debug(f"HTTP metrics: {self.metrics}")
