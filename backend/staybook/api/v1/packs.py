"""Pack catalogue, quote requests and their administration."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api import deps
from staybook.api.errors import not_found, unwrap
from staybook.models.pack import PackRequestStatus
from staybook.schemas.pack import (
    PackCreate,
    PackRead,
    PackRequestCreate,
    PackRequestRead,
    PackRequestStatusUpdate,
    PackUpdate,
)
from staybook.services import notification_service, pack_service

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(deps.require_admin)])
admin_requests_router = APIRouter(dependencies=[Depends(deps.require_admin)])


@router.get("", response_model=list[PackRead], summary="List active packs")
async def list_packs(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[PackRead]:
    packs = await pack_service.list_packs(session)
    return [PackRead.model_validate(obj) for obj in packs]


@router.get("/{slug}", response_model=PackRead, summary="Get pack by slug")
async def get_pack_by_slug(
    slug: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PackRead:
    pack = await pack_service.get_pack_by_slug(session, slug=slug)
    if pack is None:
        raise not_found("Pack")
    return PackRead.model_validate(pack)


@router.post(
    "/{pack_id}/requests",
    response_model=PackRequestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Request a quote for a pack",
)
async def request_pack(
    pack_id: uuid.UUID,
    payload: PackRequestCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    background_tasks: BackgroundTasks,
) -> PackRequestRead:
    result = await pack_service.request_pack(session, pack_id=pack_id, payload=payload)
    pack_request = unwrap(result)
    notification_service.notify_pack_request(pack_request, background_tasks)
    return PackRequestRead.model_validate(pack_request)


@admin_router.get("", response_model=list[PackRead], summary="List all packs")
async def admin_list_packs(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[PackRead]:
    packs = await pack_service.list_packs(session, include_inactive=True)
    return [PackRead.model_validate(obj) for obj in packs]


@admin_router.post(
    "",
    response_model=PackRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create pack",
)
async def create_pack(
    payload: PackCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PackRead:
    result = await pack_service.create_pack(session, payload=payload)
    return PackRead.model_validate(unwrap(result))


@admin_router.patch("/{pack_id}", response_model=PackRead, summary="Update pack")
async def update_pack(
    pack_id: uuid.UUID,
    payload: PackUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PackRead:
    result = await pack_service.update_pack(session, pack_id=pack_id, payload=payload)
    return PackRead.model_validate(unwrap(result))


@admin_router.delete("/{pack_id}", response_model=PackRead, summary="Deactivate pack")
async def delete_pack(
    pack_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PackRead:
    result = await pack_service.delete_pack(session, pack_id=pack_id)
    return PackRead.model_validate(unwrap(result))


@admin_requests_router.get(
    "", response_model=list[PackRequestRead], summary="List pack requests"
)
async def list_pack_requests(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    request_status: Annotated[PackRequestStatus | None, Query(alias="status")] = None,
) -> list[PackRequestRead]:
    requests = await pack_service.list_pack_requests(session, status=request_status)
    return [PackRequestRead.model_validate(obj) for obj in requests]


@admin_requests_router.patch(
    "/{request_id}",
    response_model=PackRequestRead,
    summary="Mark a pack request processed or cancelled",
)
async def update_pack_request_status(
    request_id: uuid.UUID,
    payload: PackRequestStatusUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PackRequestRead:
    result = await pack_service.update_pack_request_status(
        session, request_id=request_id, status=payload.status
    )
    return PackRequestRead.model_validate(unwrap(result))
