"""Result envelope returned by the booking services."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, enum.Enum):
    """Expected failure modes surfaced to callers instead of exceptions."""

    INVALID_DATES = "invalid_dates"
    INVALID_GUESTS = "invalid_guests"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    DATES_UNAVAILABLE = "dates_unavailable"
    INVALID_TRANSITION = "invalid_transition"
    DUPLICATE_CODE = "duplicate_code"
    PERSISTENCE_ERROR = "persistence_error"


@dataclass(frozen=True, slots=True)
class ServiceResult(Generic[T]):
    """Discriminated success/failure outcome of a service operation."""

    value: T | None = None
    error: ErrorCode | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> ServiceResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorCode, message: str) -> ServiceResult[T]:
        return cls(error=error, message=message)
