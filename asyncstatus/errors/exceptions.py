from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from asyncstatus.errors.codes import ErrorCode


@dataclass
class AsyncStatusError(Exception):
    """Base class for tracker errors. Raised before any state is mutated."""

    message: str
    code: ErrorCode = ErrorCode.ILLEGAL_STATE
    operation: Optional[str] = None
    state: Optional[str] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class IllegalStateError(AsyncStatusError):
    code: ErrorCode = ErrorCode.ILLEGAL_STATE


@dataclass
class AttemptOverflowError(AsyncStatusError, OverflowError):
    code: ErrorCode = ErrorCode.ATTEMPT_OVERFLOW
