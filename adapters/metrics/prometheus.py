from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram
from asyncstatus.prom import REGISTRY

from adapters.metrics.base import AttemptOutcome, FinishedOutcome, Metrics

# -----------------------------------------------------------------------------
# Attempt metrics
# -----------------------------------------------------------------------------
attempts_total = Counter(
    "async_status_attempts_total",
    "Count of tracked attempt transitions labeled by tracker and outcome",
    ["tracker", "outcome"],  # outcome: started | success | failure
    registry=REGISTRY,
)

attempt_duration_ms = Histogram(
    "async_status_attempt_duration_ms",
    "Duration (ms) of finished attempts",
    ["tracker", "outcome"],  # outcome: success | failure
    buckets=(1, 2, 5, 10, 20, 50, 100, 200, 500, 1000, 2000, 5000, 10000, 20000, 60000),
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# In-flight state
# -----------------------------------------------------------------------------
attempt_ongoing = Gauge(
    "async_status_ongoing",
    "1 while the tracker has an attempt in flight, else 0",
    ["tracker"],
    registry=REGISTRY,
)


class PrometheusMetrics(Metrics):
    def inc_attempt(self, *, tracker: str, outcome: AttemptOutcome) -> None:
        attempts_total.labels(tracker=tracker, outcome=outcome).inc()

    def observe_attempt_duration_ms(
        self, *, tracker: str, outcome: FinishedOutcome, dt_ms: float
    ) -> None:
        attempt_duration_ms.labels(tracker=tracker, outcome=outcome).observe(
            float(dt_ms)
        )

    def set_ongoing(self, *, tracker: str, ongoing: bool) -> None:
        attempt_ongoing.labels(tracker=tracker).set(1 if ongoing else 0)

    def prime(self, *, tracker: str) -> None:
        """Create zero-valued series for a tracker so /metrics stays stable."""
        for outcome in ("started", "success", "failure"):
            attempts_total.labels(tracker=tracker, outcome=outcome).inc(0)
        attempt_ongoing.labels(tracker=tracker).set(0)
