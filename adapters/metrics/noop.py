from __future__ import annotations

from adapters.metrics.base import AttemptOutcome, FinishedOutcome, Metrics


class NoOpMetrics(Metrics):
    def inc_attempt(self, *, tracker: str, outcome: AttemptOutcome) -> None:
        return

    def observe_attempt_duration_ms(
        self, *, tracker: str, outcome: FinishedOutcome, dt_ms: float
    ) -> None:
        return

    def set_ongoing(self, *, tracker: str, ongoing: bool) -> None:
        return
