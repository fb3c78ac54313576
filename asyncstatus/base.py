from __future__ import annotations

from abc import ABC, abstractmethod


class StatusTracker(ABC):
    """
    Contract for tracking the status of one repeatable async process.

    Mutators:
    - start(): flag the process as in progress
    - end(): flag the running attempt as successfully completed
    - abort(): flag the running attempt as failed
    - reset_attempt_stats(): zero the attempt counters
    """

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def end(self) -> None: ...

    @abstractmethod
    def abort(self) -> None: ...

    @abstractmethod
    def reset_attempt_stats(self) -> None: ...

    @property
    @abstractmethod
    def is_idle(self) -> bool:
        """Not running: never started, or last attempt ended or aborted."""

    @property
    @abstractmethod
    def is_ongoing(self) -> bool: ...

    @property
    @abstractmethod
    def was_successful(self) -> bool: ...

    @property
    @abstractmethod
    def was_failed(self) -> bool: ...

    @property
    @abstractmethod
    def elapsed_time(self) -> float:
        """Milliseconds for the last attempt; -1 when start() was never called."""

    @property
    @abstractmethod
    def attempts(self) -> int: ...

    @property
    @abstractmethod
    def successful_attempts(self) -> int: ...

    @property
    @abstractmethod
    def failed_attempts(self) -> int: ...
