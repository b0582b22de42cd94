"""Reservation administration API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api import deps
from staybook.api.errors import not_found, unwrap
from staybook.db.store import SqlAlchemyBookingStore
from staybook.models.reservation import ReservationStatus
from staybook.schemas.reservation import (
    BookingConflictRead,
    PaymentStatusUpdate,
    ReservationRead,
    ReservationStatusUpdate,
)
from staybook.services import notification_service, reservation_service

admin_router = APIRouter(dependencies=[Depends(deps.require_admin)])


@admin_router.get(
    "", response_model=list[ReservationRead], summary="List reservations"
)
async def list_reservations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    reservation_status: Annotated[ReservationStatus | None, Query(alias="status")] = None,
    accommodation_id: uuid.UUID | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1)] = 50,
) -> list[ReservationRead]:
    reservations = await reservation_service.list_reservations(
        session,
        status=reservation_status,
        accommodation_id=accommodation_id,
        skip=skip,
        limit=min(limit, 100),
    )
    return [ReservationRead.model_validate(obj) for obj in reservations]


@admin_router.get(
    "/conflicts",
    response_model=list[BookingConflictRead],
    summary="Pending requests overlapping confirmed stays",
)
async def list_conflicts(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    accommodation_id: uuid.UUID | None = None,
) -> list[BookingConflictRead]:
    conflicts = await reservation_service.list_booking_conflicts(
        session, accommodation_id=accommodation_id
    )
    return [
        BookingConflictRead(
            pending=ReservationRead.model_validate(conflict.pending),
            confirmed=ReservationRead.model_validate(conflict.confirmed),
        )
        for conflict in conflicts
    ]


@admin_router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(
    reservation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ReservationRead:
    reservation = await reservation_service.get_reservation(
        session, reservation_id=reservation_id
    )
    if reservation is None:
        raise not_found("Reservation")
    return ReservationRead.model_validate(reservation)


@admin_router.patch(
    "/{reservation_id}/status",
    response_model=ReservationRead,
    summary="Confirm or cancel reservation",
)
async def update_reservation_status(
    reservation_id: uuid.UUID,
    payload: ReservationStatusUpdate,
    store: Annotated[SqlAlchemyBookingStore, Depends(deps.get_booking_store)],
    background_tasks: BackgroundTasks,
) -> ReservationRead:
    result = await reservation_service.update_reservation_status(
        store,
        reservation_id=reservation_id,
        status=payload.status,
        admin_notes=payload.admin_notes,
        cancellation_reason=payload.cancellation_reason,
    )
    reservation = unwrap(result)
    if reservation.reservation_status is ReservationStatus.CONFIRMED:
        notification_service.notify_reservation_confirmed(reservation, background_tasks)
    elif reservation.reservation_status is ReservationStatus.CANCELLED:
        notification_service.notify_reservation_cancelled(reservation, background_tasks)
    return ReservationRead.model_validate(reservation)


@admin_router.patch(
    "/{reservation_id}/payment",
    response_model=ReservationRead,
    summary="Update payment status",
)
async def update_payment_status(
    reservation_id: uuid.UUID,
    payload: PaymentStatusUpdate,
    store: Annotated[SqlAlchemyBookingStore, Depends(deps.get_booking_store)],
) -> ReservationRead:
    result = await reservation_service.update_payment_status(
        store,
        reservation_id=reservation_id,
        status=payload.status,
        payment_reference=payload.payment_reference,
    )
    return ReservationRead.model_validate(unwrap(result))
