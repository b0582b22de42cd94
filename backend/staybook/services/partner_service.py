"""Partner directory management."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.models.partner import Partner
from staybook.schemas.partner import PartnerCreate, PartnerUpdate
from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


async def list_partners(
    session: AsyncSession, *, include_inactive: bool = False
) -> list[Partner]:
    stmt = select(Partner).order_by(Partner.name.asc())
    if not include_inactive:
        stmt = stmt.where(Partner.active.is_(True))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_partner(
    session: AsyncSession, *, partner_id: uuid.UUID
) -> Partner | None:
    return await session.get(Partner, partner_id)


async def get_assignable_partner(
    session: AsyncSession, partner_id: uuid.UUID | None
) -> ServiceResult[Partner]:
    """Resolve the partner an accommodation is being attached to.

    Only active partners can receive new or moved listings.
    """
    partner = await session.get(Partner, partner_id) if partner_id else None
    if partner is None or not partner.active:
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "Unknown or inactive partner"
        )
    return ServiceResult.success(partner)


async def create_partner(
    session: AsyncSession, *, payload: PartnerCreate
) -> ServiceResult[Partner]:
    values = payload.model_dump()
    if values.get("email"):
        values["email"] = str(values["email"]).lower()
    partner = Partner(active=True, **values)
    session.add(partner)
    await session.commit()
    await session.refresh(partner)
    logger.info("Created partner %s", partner.id)
    return ServiceResult.success(partner)


async def update_partner(
    session: AsyncSession, *, partner_id: uuid.UUID, payload: PartnerUpdate
) -> ServiceResult[Partner]:
    partner = await session.get(Partner, partner_id)
    if partner is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Partner not found")

    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and not changes["name"]:
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "Partner name is required"
        )
    if "active" in changes and changes["active"] is None:
        changes.pop("active")
    if changes.get("email"):
        changes["email"] = str(changes["email"]).lower()
    for field, value in changes.items():
        setattr(partner, field, value)
    await session.commit()
    await session.refresh(partner)
    return ServiceResult.success(partner)


async def deactivate_partner(
    session: AsyncSession, *, partner_id: uuid.UUID
) -> ServiceResult[Partner]:
    """Hide a partner from assignment; its listings and history are kept."""
    partner = await session.get(Partner, partner_id)
    if partner is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Partner not found")
    partner.active = False
    await session.commit()
    await session.refresh(partner)
    logger.info("Deactivated partner %s", partner.id)
    return ServiceResult.success(partner)
