from enum import Enum


class ErrorCode(str, Enum):
    # --- Transition guards ---
    ILLEGAL_STATE = "ILLEGAL_STATE"

    # --- Counters ---
    ATTEMPT_OVERFLOW = "ATTEMPT_OVERFLOW"
