"""Accommodation catalogue, availability and booking endpoints."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api import deps
from staybook.api.errors import not_found, unwrap
from staybook.db.store import SqlAlchemyBookingStore
from staybook.models.accommodation import AccommodationType
from staybook.schemas.accommodation import (
    AccommodationCreate,
    AccommodationRead,
    AccommodationUpdate,
    AvailabilityUpdate,
    UnavailableDatesRead,
)
from staybook.schemas.reservation import ReservationCreate, ReservationCreated
from staybook.services import (
    accommodation_service,
    availability_service,
    notification_service,
    reservation_service,
)

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(deps.require_admin)])


@router.get("", response_model=list[AccommodationRead], summary="List accommodations")
async def list_accommodations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    accommodation_type: Annotated[AccommodationType | None, Query(alias="type")] = None,
    min_capacity: Annotated[int | None, Query(ge=1)] = None,
    min_price: Annotated[int | None, Query(ge=0)] = None,
    max_price: Annotated[int | None, Query(ge=0)] = None,
    check_in: date | None = None,
    check_out: date | None = None,
) -> list[AccommodationRead]:
    accommodations = await accommodation_service.list_accommodations(
        session,
        accommodation_type=accommodation_type,
        min_capacity=min_capacity,
        min_price=min_price,
        max_price=max_price,
        check_in=check_in,
        check_out=check_out,
    )
    return [AccommodationRead.model_validate(obj) for obj in accommodations]


@router.get(
    "/{slug}", response_model=AccommodationRead, summary="Get accommodation by slug"
)
async def get_accommodation_by_slug(
    slug: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    accommodation = await accommodation_service.get_accommodation_by_slug(
        session, slug=slug
    )
    if accommodation is None:
        raise not_found("Accommodation")
    return AccommodationRead.model_validate(accommodation)


@router.get(
    "/{accommodation_id}/unavailable-dates",
    response_model=UnavailableDatesRead,
    summary="Unavailable nights from today onward",
)
async def get_unavailable_dates(
    accommodation_id: uuid.UUID,
    store: Annotated[SqlAlchemyBookingStore, Depends(deps.get_booking_store)],
) -> UnavailableDatesRead:
    if await store.get_accommodation(accommodation_id) is None:
        raise not_found("Accommodation")
    dates = await availability_service.list_unavailable_dates(store, accommodation_id)
    return UnavailableDatesRead(accommodation_id=accommodation_id, dates=dates)


@router.post(
    "/{accommodation_id}/reservations",
    response_model=ReservationCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Request a reservation",
)
async def create_reservation(
    accommodation_id: uuid.UUID,
    payload: ReservationCreate,
    store: Annotated[SqlAlchemyBookingStore, Depends(deps.get_booking_store)],
    background_tasks: BackgroundTasks,
) -> ReservationCreated:
    result = await reservation_service.create_reservation(
        store, accommodation_id=accommodation_id, payload=payload
    )
    reservation = unwrap(result)
    notification_service.notify_reservation_created(reservation, background_tasks)
    return ReservationCreated.model_validate(reservation)


@admin_router.get(
    "", response_model=list[AccommodationRead], summary="List all accommodations"
)
async def admin_list_accommodations(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[AccommodationRead]:
    accommodations = await accommodation_service.list_accommodations(
        session, include_inactive=True
    )
    return [AccommodationRead.model_validate(obj) for obj in accommodations]


@admin_router.post(
    "",
    response_model=AccommodationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create accommodation",
)
async def create_accommodation(
    payload: AccommodationCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    result = await accommodation_service.create_accommodation(session, payload=payload)
    return AccommodationRead.model_validate(unwrap(result))


@admin_router.get(
    "/{accommodation_id}", response_model=AccommodationRead, summary="Get accommodation"
)
async def get_accommodation(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    accommodation = await accommodation_service.get_accommodation(
        session, accommodation_id=accommodation_id
    )
    if accommodation is None:
        raise not_found("Accommodation")
    return AccommodationRead.model_validate(accommodation)


@admin_router.patch(
    "/{accommodation_id}",
    response_model=AccommodationRead,
    summary="Update accommodation",
)
async def update_accommodation(
    accommodation_id: uuid.UUID,
    payload: AccommodationUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    result = await accommodation_service.update_accommodation(
        session, accommodation_id=accommodation_id, payload=payload
    )
    return AccommodationRead.model_validate(unwrap(result))


@admin_router.delete(
    "/{accommodation_id}",
    response_model=AccommodationRead,
    summary="Deactivate accommodation",
)
async def deactivate_accommodation(
    accommodation_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AccommodationRead:
    result = await accommodation_service.deactivate_accommodation(
        session, accommodation_id=accommodation_id
    )
    return AccommodationRead.model_validate(unwrap(result))


@admin_router.put(
    "/{accommodation_id}/availability",
    response_model=list[date],
    summary="Block or unblock dates",
)
async def update_availability(
    accommodation_id: uuid.UUID,
    payload: AvailabilityUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[date]:
    """Return the dates that changed state."""
    if payload.blocked:
        result = await availability_service.block_dates(
            session, accommodation_id=accommodation_id, dates=payload.dates
        )
    else:
        result = await availability_service.unblock_dates(
            session, accommodation_id=accommodation_id, dates=payload.dates
        )
    return unwrap(result)
