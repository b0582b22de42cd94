"""Administration dashboard figures."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api import deps
from staybook.schemas.reporting import AdminStatsRead, PartnerCommissionRead
from staybook.services import reporting_service

admin_router = APIRouter(dependencies=[Depends(deps.require_admin)])


@admin_router.get("", response_model=AdminStatsRead, summary="Dashboard statistics")
async def get_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> AdminStatsRead:
    return await reporting_service.get_admin_stats(session)


@admin_router.get(
    "/partners",
    response_model=list[PartnerCommissionRead],
    summary="Commission owed per partner",
)
async def get_partner_commissions(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[PartnerCommissionRead]:
    return await reporting_service.list_partner_commissions(session)
