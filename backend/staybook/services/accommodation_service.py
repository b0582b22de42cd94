"""Accommodation catalogue management."""
from __future__ import annotations

import logging
import re
import unicodedata
import uuid
from collections.abc import Sequence
from datetime import date

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.db.store import SqlAlchemyBookingStore
from staybook.models.accommodation import (
    Accommodation,
    AccommodationStatus,
    AccommodationType,
)
from staybook.schemas.accommodation import AccommodationCreate, AccommodationUpdate
from staybook.services import availability_service, partner_service
from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(name: str) -> str:
    """Lower-case, accent-free, hyphenated identifier for URLs."""
    decomposed = unicodedata.normalize("NFD", name.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_SLUG_CHARS.sub("", stripped)
    slug = _WHITESPACE.sub("-", slug)
    return _HYPHENS.sub("-", slug).strip("-")


async def list_accommodations(
    session: AsyncSession,
    *,
    accommodation_type: AccommodationType | None = None,
    min_capacity: int | None = None,
    min_price: int | None = None,
    max_price: int | None = None,
    check_in: date | None = None,
    check_out: date | None = None,
    include_inactive: bool = False,
) -> list[Accommodation]:
    """List accommodations, optionally keeping only those free for a stay."""
    stmt: Select[tuple[Accommodation]] = select(Accommodation).order_by(
        Accommodation.featured.desc(), Accommodation.name.asc()
    )
    if not include_inactive:
        stmt = stmt.where(Accommodation.status == AccommodationStatus.ACTIVE)
    if accommodation_type is not None:
        stmt = stmt.where(Accommodation.accommodation_type == accommodation_type)
    if min_capacity is not None:
        stmt = stmt.where(Accommodation.capacity >= min_capacity)
    if min_price is not None:
        stmt = stmt.where(Accommodation.price_per_night >= min_price)
    if max_price is not None:
        stmt = stmt.where(Accommodation.price_per_night <= max_price)
    result = await session.execute(stmt)
    accommodations = list(result.scalars().all())

    if check_in is None or check_out is None or check_out <= check_in:
        return accommodations

    store = SqlAlchemyBookingStore(session)
    available: list[Accommodation] = []
    for accommodation in accommodations:
        if await availability_service.is_available(
            store, accommodation.id, check_in, check_out
        ):
            available.append(accommodation)
    return available


async def get_accommodation(
    session: AsyncSession, *, accommodation_id: uuid.UUID
) -> Accommodation | None:
    return await session.get(Accommodation, accommodation_id)


async def get_accommodation_by_slug(
    session: AsyncSession, *, slug: str
) -> Accommodation | None:
    result = await session.execute(
        select(Accommodation).where(
            Accommodation.slug == slug,
            Accommodation.status == AccommodationStatus.ACTIVE,
        )
    )
    return result.scalar_one_or_none()


async def create_accommodation(
    session: AsyncSession, *, payload: AccommodationCreate
) -> ServiceResult[Accommodation]:
    partner = await partner_service.get_assignable_partner(session, payload.partner_id)
    if not partner.ok:
        return ServiceResult.failure(partner.error, partner.message)
    accommodation = Accommodation(
        slug=generate_slug(payload.name),
        partner=partner.value,
        **payload.model_dump(),
    )
    session.add(accommodation)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "An accommodation with this name already exists"
        )
    await session.refresh(accommodation)
    logger.info("Created accommodation %s", accommodation.slug)
    return ServiceResult.success(accommodation)


async def update_accommodation(
    session: AsyncSession,
    *,
    accommodation_id: uuid.UUID,
    payload: AccommodationUpdate,
) -> ServiceResult[Accommodation]:
    """Apply changes; existing reservations keep their pricing snapshot."""
    accommodation = await session.get(Accommodation, accommodation_id)
    if accommodation is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Accommodation not found")

    changes = payload.model_dump(exclude_unset=True)
    if "partner_id" in changes and changes["partner_id"] != accommodation.partner_id:
        partner = await partner_service.get_assignable_partner(
            session, changes["partner_id"]
        )
        if not partner.ok:
            return ServiceResult.failure(partner.error, partner.message)
        accommodation.partner = partner.value
    for field, value in changes.items():
        setattr(accommodation, field, value)
    if "name" in changes:
        accommodation.slug = generate_slug(accommodation.name)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "An accommodation with this name already exists"
        )
    await session.refresh(accommodation)
    return ServiceResult.success(accommodation)


async def deactivate_accommodation(
    session: AsyncSession, *, accommodation_id: uuid.UUID
) -> ServiceResult[Accommodation]:
    accommodation = await session.get(Accommodation, accommodation_id)
    if accommodation is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Accommodation not found")
    accommodation.status = AccommodationStatus.INACTIVE
    await session.commit()
    await session.refresh(accommodation)
    return ServiceResult.success(accommodation)


async def list_by_ids(
    session: AsyncSession, ids: Sequence[uuid.UUID]
) -> list[Accommodation]:
    if not ids:
        return []
    result = await session.execute(select(Accommodation).where(Accommodation.id.in_(ids)))
    return list(result.scalars().all())
