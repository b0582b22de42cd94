"""Translate service failures into HTTP errors."""

from __future__ import annotations

import logging
from typing import TypeVar

from fastapi import HTTPException, status

from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STATUS_BY_ERROR: dict[ErrorCode, int] = {
    ErrorCode.INVALID_DATES: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_GUESTS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DATES_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_CODE: status.HTTP_409_CONFLICT,
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_GENERIC_FAILURE = "An unexpected error occurred. Please try again."


def unwrap(result: ServiceResult[T]) -> T:
    """Return the result value or raise the matching ``HTTPException``."""
    if result.error is None:
        return result.value  # type: ignore[return-value]
    status_code = _STATUS_BY_ERROR.get(
        result.error, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= 500:
        logger.error("Service failure %s: %s", result.error.value, result.message)
        detail = {"code": result.error.value, "message": _GENERIC_FAILURE}
    else:
        detail = {"code": result.error.value, "message": result.message}
    raise HTTPException(status_code=status_code, detail=detail)


def not_found(entity: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": ErrorCode.NOT_FOUND.value, "message": f"{entity} not found"},
    )
