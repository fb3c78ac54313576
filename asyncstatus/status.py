from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from adapters.metrics.base import FinishedOutcome, Metrics
from adapters.metrics.noop import NoOpMetrics
from asyncstatus.base import StatusTracker
from asyncstatus.clock import Clock, monotonic_ms
from asyncstatus.errors.exceptions import AttemptOverflowError, IllegalStateError
from asyncstatus.types import (
    MAX_SAFE_COUNT,
    UNDEFINED_TIME,
    AsyncState,
    StatusSnapshot,
)

log = logging.getLogger(__name__)


class AsyncStatus(StatusTracker):
    """
    Bookkeeping for one logical async operation attempted repeatedly over time.

    The caller does the work and reports transitions:

        status.start()
        ...
        status.end()    # or status.abort() on failure

    Every guard runs before any field is touched, so a rejected call leaves
    the tracker exactly as it was.

    Not thread-safe: a tracker shared between concurrent callers needs an
    external lock or a single owner.
    """

    UNDEFINED_TIME = UNDEFINED_TIME
    MAX_SAFE_COUNT = MAX_SAFE_COUNT

    START_ERROR = "'start()' cannot be called while already running"
    END_ERROR = "'end()' cannot be called while idle"
    ABORT_ERROR = "'abort()' cannot be called while idle"
    OVERFLOW_ERROR = f"attempt counter overflow: limit is {MAX_SAFE_COUNT}"

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        clock: Clock | None = None,
        metrics: Metrics | None = None,
    ) -> None:
        self.name = name or "default"
        self._clock: Clock = clock or monotonic_ms
        self.metrics: Metrics = metrics or NoOpMetrics()

        # attempts
        self._attempt_count = 0
        self._success_count = 0
        self._failure_count = 0
        # times
        self._start_time: float = 0.0
        self._end_time: float = UNDEFINED_TIME
        # state
        self._state = AsyncState.NEVER_STARTED

    @classmethod
    def from_counts(
        cls,
        attempts: int = 0,
        successful_attempts: int = 0,
        failed_attempts: int = 0,
        **kwargs,
    ) -> "AsyncStatus":
        """
        Build an idle tracker with pre-seeded counters.

        Meant for white-box checks such as driving the attempt counter to
        MAX_SAFE_COUNT without looping. Extra kwargs go to the constructor.
        """
        for label, value in (
            ("attempts", attempts),
            ("successful_attempts", successful_attempts),
            ("failed_attempts", failed_attempts),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{label} must be an int, got {type(value).__name__}")
            if value < 0 or value > MAX_SAFE_COUNT:
                raise ValueError(f"{label} must be within [0, {MAX_SAFE_COUNT}]")
        if successful_attempts + failed_attempts > attempts:
            raise ValueError(
                "successful_attempts + failed_attempts cannot exceed attempts"
            )

        status = cls(**kwargs)
        status._attempt_count = attempts
        status._success_count = successful_attempts
        status._failure_count = failed_attempts
        return status

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._forbidden_state_guard(self.is_ongoing, "start", self.START_ERROR)
        self._overflow_guard(self._attempt_count)
        self._state = AsyncState.RUNNING
        self._attempt_count += 1
        self._start_time = self._clock()
        self._end_time = UNDEFINED_TIME
        log.debug("[%s] attempt %d started", self.name, self._attempt_count)

        self.metrics.inc_attempt(tracker=self.name, outcome="started")
        self.metrics.set_ongoing(tracker=self.name, ongoing=True)

    def end(self) -> None:
        self._forbidden_state_guard(self.is_idle, "end", self.END_ERROR)
        self._state = AsyncState.COMPLETED_SUCCESS
        self._success_count += 1
        self._end_time = self._clock()
        self._report_finished("success")

    def abort(self) -> None:
        self._forbidden_state_guard(self.is_idle, "abort", self.ABORT_ERROR)
        self._state = AsyncState.COMPLETED_FAILURE
        self._failure_count += 1
        self._end_time = self._clock()
        self._report_finished("failure")

    def reset_attempt_stats(self) -> None:
        """Zero the counters. State and timestamps are left untouched."""
        self._attempt_count = 0
        self._success_count = 0
        self._failure_count = 0
        log.debug("[%s] attempt stats reset", self.name)

    @contextmanager
    def attempt(self) -> Iterator["AsyncStatus"]:
        """
        Track one attempt around a block.

        start() on enter, end() on normal exit, abort() if the block raises
        (the exception propagates). If the block already reported the outcome
        itself, nothing more is recorded on exit.
        """
        self.start()
        try:
            yield self
        except BaseException:
            if self.is_ongoing:
                self.abort()
            raise
        if self.is_ongoing:
            self.end()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> AsyncState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is not AsyncState.RUNNING

    @property
    def is_ongoing(self) -> bool:
        return self._state is AsyncState.RUNNING

    @property
    def was_successful(self) -> bool:
        return self._state is AsyncState.COMPLETED_SUCCESS

    @property
    def was_failed(self) -> bool:
        return self._state is AsyncState.COMPLETED_FAILURE

    @property
    def elapsed_time(self) -> float:
        """
        Milliseconds between the last start() and the matching end()/abort(),
        or the current time while the attempt is still running.
        UNDEFINED_TIME when start() was never called.
        """
        if self._state is AsyncState.NEVER_STARTED:
            return UNDEFINED_TIME
        if self._state is AsyncState.RUNNING:
            duration = self._clock() - self._start_time
        else:
            duration = self._end_time - self._start_time
        # non-monotonic clock
        return UNDEFINED_TIME if duration < 0 else duration

    @property
    def attempts(self) -> int:
        return self._attempt_count

    @property
    def successful_attempts(self) -> int:
        return self._success_count

    @property
    def failed_attempts(self) -> int:
        return self._failure_count

    def snapshot(self) -> StatusSnapshot:
        return StatusSnapshot(
            state=self._state,
            attempts=self._attempt_count,
            successful_attempts=self._success_count,
            failed_attempts=self._failure_count,
            elapsed_ms=self.elapsed_time,
            name=self.name,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, state={self._state.value}, "
            f"attempts={self._attempt_count}, ok={self._success_count}, "
            f"failed={self._failure_count})"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _report_finished(self, outcome: FinishedOutcome) -> None:
        dt_ms = self.elapsed_time
        log.debug(
            "[%s] attempt %d finished: %s (%.3f ms)",
            self.name,
            self._attempt_count,
            outcome,
            dt_ms,
        )
        self.metrics.inc_attempt(tracker=self.name, outcome=outcome)
        if dt_ms >= 0:
            self.metrics.observe_attempt_duration_ms(
                tracker=self.name, outcome=outcome, dt_ms=dt_ms
            )
        self.metrics.set_ongoing(tracker=self.name, ongoing=False)

    def _forbidden_state_guard(
        self, is_illegal: bool, operation: str, message: str
    ) -> None:
        if is_illegal:
            log.warning(
                "[%s] rejected %s() in state %s", self.name, operation, self._state
            )
            raise IllegalStateError(
                message=message, operation=operation, state=self._state.value
            )

    def _overflow_guard(self, current_count: int) -> None:
        if current_count >= MAX_SAFE_COUNT:
            log.warning("[%s] attempt counter reached %d", self.name, current_count)
            raise AttemptOverflowError(
                message=self.OVERFLOW_ERROR, operation="start", state=self._state.value
            )
