from __future__ import annotations

import time
from typing import Callable

# Zero-argument callable returning milliseconds from an arbitrary epoch.
Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Monotonic time in milliseconds, unaffected by wall-clock changes."""
    return time.perf_counter() * 1000.0
