"""Pack catalogue and pack inquiry handling."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.models.accommodation import Accommodation
from staybook.models.pack import Pack, PackRequest, PackRequestStatus, PackStatus
from staybook.schemas.pack import PackCreate, PackRequestCreate, PackUpdate
from staybook.services import accommodation_service
from staybook.services.promo_code_service import normalize_code
from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_ALLOWED_REQUEST_TRANSITIONS: dict[PackRequestStatus, set[PackRequestStatus]] = {
    PackRequestStatus.NEW: {PackRequestStatus.PROCESSED, PackRequestStatus.CANCELLED},
    PackRequestStatus.PROCESSED: set(),
    PackRequestStatus.CANCELLED: set(),
}


async def _resolve_accommodations(
    session: AsyncSession, ids: Sequence[uuid.UUID]
) -> list[Accommodation] | None:
    unique_ids = list(dict.fromkeys(ids))
    accommodations = await accommodation_service.list_by_ids(session, unique_ids)
    if len(accommodations) != len(unique_ids):
        return None
    return accommodations


async def list_packs(
    session: AsyncSession, *, include_inactive: bool = False
) -> list[Pack]:
    stmt = select(Pack).order_by(Pack.featured.desc(), Pack.name.asc())
    if not include_inactive:
        stmt = stmt.where(Pack.status == PackStatus.ACTIVE)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_pack(session: AsyncSession, *, pack_id: uuid.UUID) -> Pack | None:
    return await session.get(Pack, pack_id)


async def get_pack_by_slug(session: AsyncSession, *, slug: str) -> Pack | None:
    result = await session.execute(
        select(Pack).where(Pack.slug == slug, Pack.status == PackStatus.ACTIVE)
    )
    return result.scalar_one_or_none()


async def create_pack(
    session: AsyncSession, *, payload: PackCreate
) -> ServiceResult[Pack]:
    accommodations = await _resolve_accommodations(session, payload.accommodation_ids)
    if accommodations is None:
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "Unknown accommodation in pack"
        )

    data = payload.model_dump(exclude={"accommodation_ids"})
    pack = Pack(
        slug=accommodation_service.generate_slug(payload.name),
        status=PackStatus.ACTIVE,
        accommodations=accommodations,
        **data,
    )
    session.add(pack)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "A pack with this name already exists"
        )
    await session.refresh(pack)
    logger.info("Created pack %s", pack.slug)
    return ServiceResult.success(pack)


async def update_pack(
    session: AsyncSession, *, pack_id: uuid.UUID, payload: PackUpdate
) -> ServiceResult[Pack]:
    pack = await session.get(Pack, pack_id)
    if pack is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Pack not found")

    changes = payload.model_dump(exclude_unset=True, exclude={"accommodation_ids"})
    if payload.accommodation_ids is not None:
        accommodations = await _resolve_accommodations(
            session, payload.accommodation_ids
        )
        if accommodations is None:
            return ServiceResult.failure(
                ErrorCode.INVALID_INPUT, "Unknown accommodation in pack"
            )
        pack.accommodations = accommodations
    for field, value in changes.items():
        setattr(pack, field, value)
    if "name" in changes:
        pack.slug = accommodation_service.generate_slug(pack.name)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "A pack with this name already exists"
        )
    await session.refresh(pack)
    return ServiceResult.success(pack)


async def delete_pack(
    session: AsyncSession, *, pack_id: uuid.UUID
) -> ServiceResult[Pack]:
    """Soft delete: the pack is hidden but its requests keep pointing to it."""
    pack = await session.get(Pack, pack_id)
    if pack is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Pack not found")
    pack.status = PackStatus.INACTIVE
    await session.commit()
    await session.refresh(pack)
    return ServiceResult.success(pack)


async def request_pack(
    session: AsyncSession, *, pack_id: uuid.UUID, payload: PackRequestCreate
) -> ServiceResult[PackRequest]:
    """Record a quote request for an active pack.

    A promo code given here is stored for the sales team; it is not redeemed.
    """
    pack = await session.get(Pack, pack_id)
    if pack is None or pack.status != PackStatus.ACTIVE:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Pack not found")

    pack_request = PackRequest(
        pack_id=pack.id,
        pack_name=pack.name,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=str(payload.email),
        phone=payload.phone,
        event_date=payload.event_date,
        guests=payload.guests,
        message=payload.message or None,
        promo_code=normalize_code(payload.promo_code) or None,
        status=PackRequestStatus.NEW,
    )
    session.add(pack_request)
    await session.commit()
    await session.refresh(pack_request)
    logger.info("Pack request %s received for %s", pack_request.id, pack.slug)
    return ServiceResult.success(pack_request)


async def list_pack_requests(
    session: AsyncSession, *, status: PackRequestStatus | None = None
) -> list[PackRequest]:
    stmt = select(PackRequest).order_by(PackRequest.created_at.desc())
    if status is not None:
        stmt = stmt.where(PackRequest.status == status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def update_pack_request_status(
    session: AsyncSession, *, request_id: uuid.UUID, status: PackRequestStatus
) -> ServiceResult[PackRequest]:
    pack_request = await session.get(PackRequest, request_id)
    if pack_request is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Pack request not found")
    current = pack_request.status
    if status not in _ALLOWED_REQUEST_TRANSITIONS.get(current, set()):
        return ServiceResult.failure(
            ErrorCode.INVALID_TRANSITION,
            f"Invalid status transition from {current.value} to {status.value}",
        )
    pack_request.status = status
    await session.commit()
    await session.refresh(pack_request)
    return ServiceResult.success(pack_request)
