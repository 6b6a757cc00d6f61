"""Tests for HTTP metrics collection."""

from httpthings.adapters.driven.metrics.http_metrics import Metrics
from httpthings.ports.metrics import HttpAttemptDto

__all__ = []


def test_metrics_initialization() -> None:
    """Metrics should initialize with empty window."""
    metrics = Metrics()
    assert str(metrics) == "Metrics: waiting for data …"


def test_metrics_records_attempt() -> None:
    """Metrics should record HTTP attempts."""
    metrics = Metrics(window_size=10)
    metrics.update(
        HttpAttemptDto(
            started_at_sec=100.0,
            finished_at_sec=100.5,
            is_failed=False,
            status_code=200,
        )
    )

    assert "waiting for data" not in str(metrics)
    assert "status=200" in str(metrics)


def test_attempt_elapsed_ms() -> None:
    """Attempts should expose their duration in milliseconds."""
    attempt = HttpAttemptDto(started_at_sec=10.0, finished_at_sec=10.25)

    assert attempt.elapsed_ms == 250.0


def test_metrics_calculates_latency() -> None:
    """Metrics should average latency over the window."""
    metrics = Metrics(window_size=10)
    metrics.update(HttpAttemptDto(100.0, 100.1, False, 200))
    metrics.update(HttpAttemptDto(200.0, 200.3, False, 200))

    assert "latency= 200.0 ms" in str(metrics)


def test_metrics_tracks_failures() -> None:
    """Metrics should track failure rate, including attempts without status."""
    metrics = Metrics(window_size=10)

    for i in range(8):
        metrics.update(HttpAttemptDto(100.0 + i, 100.0 + i, False, 200))
    metrics.update(HttpAttemptDto(108.0, 108.0, True, 500))
    metrics.update(HttpAttemptDto(109.0, 109.0, True, None))

    output = str(metrics)
    assert "fail= 20.0%" in output
    assert "status=  0" in output


def test_metrics_respects_window_size() -> None:
    """Metrics should maintain sliding window of specified size."""
    metrics = Metrics(window_size=5)

    for i in range(10):
        metrics.update(HttpAttemptDto(100.0 + i, 100.0 + i, False, 200))

    output = str(metrics)
    assert "win=5/5" in output
    assert "total=10" in output
