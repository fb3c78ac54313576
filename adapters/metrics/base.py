from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

AttemptOutcome = Literal["started", "success", "failure"]
FinishedOutcome = Literal["success", "failure"]


class Metrics(ABC):
    @abstractmethod
    def inc_attempt(self, *, tracker: str, outcome: AttemptOutcome) -> None: ...

    @abstractmethod
    def observe_attempt_duration_ms(
        self, *, tracker: str, outcome: FinishedOutcome, dt_ms: float
    ) -> None: ...

    @abstractmethod
    def set_ongoing(self, *, tracker: str, ongoing: bool) -> None: ...
