from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

# Returned by elapsed-time queries when no meaningful duration exists.
UNDEFINED_TIME = -1

# Largest counter value representable without precision loss in a double.
MAX_SAFE_COUNT = 2**53 - 1


class AsyncState(str, Enum):
    """
    Lifecycle of one tracked operation.

    NEVER_STARTED -> RUNNING -> (COMPLETED_SUCCESS | COMPLETED_FAILURE) -> RUNNING ...
    There is no terminal state.
    """

    # start() has never been called
    NEVER_STARTED = "never_started"

    # An attempt is in flight
    RUNNING = "running"

    # Last attempt finished with end()
    COMPLETED_SUCCESS = "completed_success"

    # Last attempt finished with abort()
    COMPLETED_FAILURE = "completed_failure"

    def __str__(self) -> str:
        return self.value


# =====================
# Observability
# =====================


@dataclass(frozen=True)
class StatusSnapshot:
    """
    Point-in-time copy of a tracker's public state.
    Adapters (logs/HTTP/UI) should serialize this with to_dict() at the boundary.
    """

    state: AsyncState
    attempts: int
    successful_attempts: int
    failed_attempts: int
    elapsed_ms: float

    name: Optional[str] = None

    @property
    def is_ongoing(self) -> bool:
        return self.state is AsyncState.RUNNING

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["state"] = self.state.value
        return out
