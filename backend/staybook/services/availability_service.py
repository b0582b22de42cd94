"""Availability checks combining manual blocks and confirmed stays."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, date, datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.core.dates import DateRange
from staybook.db.store import BookingStore
from staybook.models.accommodation import Accommodation, AvailabilityBlock
from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


async def is_available(
    store: BookingStore,
    accommodation_id: uuid.UUID,
    check_in: date,
    check_out: date,
    *,
    exclude_reservation_id: uuid.UUID | None = None,
) -> bool:
    """Return True when no night of the stay is blocked or already confirmed.

    Only ``confirmed`` reservations occupy dates; pending requests never block
    one another.
    """
    requested = DateRange(check_in, check_out)
    blocked = await store.list_blocked_dates(
        accommodation_id, start=check_in, end=check_out
    )
    if any(day in blocked for day in requested.dates()):
        return False

    overlaps = await find_confirmed_overlaps(
        store,
        accommodation_id,
        requested,
        exclude_reservation_id=exclude_reservation_id,
    )
    return not overlaps


async def find_confirmed_overlaps(
    store: BookingStore,
    accommodation_id: uuid.UUID,
    stay: DateRange,
    *,
    exclude_reservation_id: uuid.UUID | None = None,
) -> list[DateRange]:
    """Return confirmed stays sharing at least one night with ``stay``."""
    confirmed = await store.list_confirmed_reservations(
        accommodation_id, stay, exclude_reservation_id=exclude_reservation_id
    )
    return [other for other in confirmed if other.overlaps(stay)]


async def list_unavailable_dates(
    store: BookingStore,
    accommodation_id: uuid.UUID,
    *,
    today: date | None = None,
) -> list[date]:
    """Return every unavailable night from ``today`` onward, sorted."""
    start = today or datetime.now(UTC).date()
    unavailable = await store.list_blocked_dates(accommodation_id, start=start)

    upcoming = DateRange(start, date.max)
    for stay in await store.list_confirmed_reservations(accommodation_id, upcoming):
        unavailable.update(day for day in stay.dates() if day >= start)
    return sorted(unavailable)


async def block_dates(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    dates: Iterable[date],
) -> ServiceResult[list[date]]:
    """Mark dates unavailable; dates already blocked are left untouched."""
    accommodation = await session.get(Accommodation, accommodation_id)
    if accommodation is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Accommodation not found")

    requested = set(dates)
    existing_result = await session.execute(
        select(AvailabilityBlock.day).where(
            AvailabilityBlock.accommodation_id == accommodation_id,
            AvailabilityBlock.day.in_(requested),
        )
    )
    existing = set(existing_result.scalars().all())
    added = sorted(requested - existing)
    session.add_all(
        AvailabilityBlock(accommodation_id=accommodation_id, day=day) for day in added
    )
    await session.commit()
    logger.info("Blocked %d date(s) for accommodation %s", len(added), accommodation_id)
    return ServiceResult.success(added)


async def unblock_dates(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    dates: Iterable[date],
) -> ServiceResult[list[date]]:
    """Remove manual blocks for the given dates."""
    accommodation = await session.get(Accommodation, accommodation_id)
    if accommodation is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Accommodation not found")

    requested = sorted(set(dates))
    await session.execute(
        delete(AvailabilityBlock).where(
            AvailabilityBlock.accommodation_id == accommodation_id,
            AvailabilityBlock.day.in_(requested),
        )
    )
    await session.commit()
    logger.info(
        "Unblocked %d date(s) for accommodation %s", len(requested), accommodation_id
    )
    return ServiceResult.success(requested)
