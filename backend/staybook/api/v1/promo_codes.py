"""Promo code preview and administration."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.api import deps
from staybook.api.errors import unwrap
from staybook.db.store import SqlAlchemyBookingStore
from staybook.schemas.promo_code import (
    PromoCodeCreate,
    PromoCodeRead,
    PromoCodeToggle,
    PromoCodeValidateRequest,
    PromoCodeValidationRead,
)
from staybook.services import promo_code_service
from staybook.services.results import ErrorCode

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(deps.require_admin)])


@router.post(
    "/validate",
    response_model=PromoCodeValidationRead,
    summary="Preview a promo code discount",
)
async def validate_promo_code(
    payload: PromoCodeValidateRequest,
    store: Annotated[SqlAlchemyBookingStore, Depends(deps.get_booking_store)],
) -> PromoCodeValidationRead:
    """Check a code without consuming a use; invalid codes answer 400."""
    validation = await promo_code_service.validate_promo_code(
        store, payload.code, payload.total_price
    )
    if not validation.valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": ErrorCode.INVALID_INPUT.value,
                "message": "Promo code cannot be applied",
                "reason": validation.reason.value if validation.reason else None,
            },
        )
    return PromoCodeValidationRead.model_validate(validation.to_dict())


@admin_router.get("", response_model=list[PromoCodeRead], summary="List promo codes")
async def list_promo_codes(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> list[PromoCodeRead]:
    promos = await promo_code_service.list_promo_codes(session)
    return [PromoCodeRead.model_validate(obj) for obj in promos]


@admin_router.post(
    "",
    response_model=PromoCodeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create promo code",
)
async def create_promo_code(
    payload: PromoCodeCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PromoCodeRead:
    result = await promo_code_service.create_promo_code(
        session,
        code=payload.code,
        discount_type=payload.discount_type,
        discount_value=payload.discount_value,
        expires_at=payload.expires_at,
        max_uses=payload.max_uses,
    )
    return PromoCodeRead.model_validate(unwrap(result))


@admin_router.patch(
    "/{promo_code_id}", response_model=PromoCodeRead, summary="Toggle promo code"
)
async def toggle_promo_code(
    promo_code_id: uuid.UUID,
    payload: PromoCodeToggle,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PromoCodeRead:
    result = await promo_code_service.set_promo_code_active(
        session, promo_code_id=promo_code_id, active=payload.active
    )
    return PromoCodeRead.model_validate(unwrap(result))


@admin_router.delete(
    "/{promo_code_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete promo code",
)
async def delete_promo_code(
    promo_code_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    unwrap(
        await promo_code_service.delete_promo_code(
            session, promo_code_id=promo_code_id
        )
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
