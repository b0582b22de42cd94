"""Partner directory endpoints for administrators."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api import deps
from staybook.api.errors import not_found, unwrap
from staybook.schemas.partner import PartnerCreate, PartnerRead, PartnerUpdate
from staybook.services import partner_service

admin_router = APIRouter(dependencies=[Depends(deps.require_admin)])


@admin_router.get("", response_model=list[PartnerRead], summary="List partners")
async def list_partners(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    include_inactive: Annotated[bool, Query()] = False,
) -> list[PartnerRead]:
    partners = await partner_service.list_partners(
        session, include_inactive=include_inactive
    )
    return [PartnerRead.model_validate(obj) for obj in partners]


@admin_router.post(
    "",
    response_model=PartnerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register partner",
)
async def create_partner(
    payload: PartnerCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PartnerRead:
    result = await partner_service.create_partner(session, payload=payload)
    return PartnerRead.model_validate(unwrap(result))


@admin_router.get("/{partner_id}", response_model=PartnerRead, summary="Get partner")
async def get_partner(
    partner_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PartnerRead:
    partner = await partner_service.get_partner(session, partner_id=partner_id)
    if partner is None:
        raise not_found("Partner")
    return PartnerRead.model_validate(partner)


@admin_router.patch(
    "/{partner_id}", response_model=PartnerRead, summary="Update partner"
)
async def update_partner(
    partner_id: uuid.UUID,
    payload: PartnerUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PartnerRead:
    result = await partner_service.update_partner(
        session, partner_id=partner_id, payload=payload
    )
    return PartnerRead.model_validate(unwrap(result))


@admin_router.delete(
    "/{partner_id}", response_model=PartnerRead, summary="Deactivate partner"
)
async def deactivate_partner(
    partner_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PartnerRead:
    result = await partner_service.deactivate_partner(session, partner_id=partner_id)
    return PartnerRead.model_validate(unwrap(result))
