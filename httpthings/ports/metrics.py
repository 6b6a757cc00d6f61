"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["HttpAttemptDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class HttpAttemptDto:
    """Immutable snapshot of a single HTTP attempt.

    Attributes:
        started_at_sec: Monotonic seconds when the request left the process.
        finished_at_sec: Monotonic seconds when the body was read or the call failed.
        is_failed: True if considered failed (network error, non-2xx).
        status_code: HTTP status code when response arrived; None otherwise.
    """

    started_at_sec: float
    finished_at_sec: float
    is_failed: bool = False
    status_code: int | None = None

    @property
    def elapsed_ms(self) -> float:
        """Return the wall time of the attempt in milliseconds."""
        return (self.finished_at_sec - self.started_at_sec) * 1_000.0


class MetricsPort(Protocol):
    """Interface for recording HTTP attempt metrics.

    Implementations must be async-safe and non-blocking.
    The transport calls update() after each attempt; presentation layers call
    __str__() to render summaries.
    """

    def update(self, attempt: HttpAttemptDto, /) -> None:
        """Record a finished HTTP attempt.

        Args:
            attempt: The attempt to record.
        """
        ...

    def __str__(self) -> str:
        """Return concise textual summary for humans.

        Returns:
            Formatted metrics string.
        """
        ...
