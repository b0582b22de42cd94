"""Promo code validation, redemption and administration."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.db.store import BookingStore
from staybook.models.promo_code import DiscountType, PromoCode
from staybook.services.pricing_service import to_amount
from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class PromoRejection(str, enum.Enum):
    """Reasons a promo code cannot be applied."""

    EMPTY = "empty code"
    UNKNOWN = "invalid code"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    EXHAUSTED = "usage limit reached"


@dataclass(frozen=True, slots=True)
class PromoValidation:
    """Outcome of checking a promo code against a base price."""

    valid: bool
    code: str | None = None
    discount_type: DiscountType | None = None
    discount_value: Decimal | None = None
    discount_amount: int = 0
    reason: PromoRejection | None = None
    promo_code_id: uuid.UUID | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.valid:
            return {"valid": False, "reason": self.reason.value if self.reason else None}
        return {
            "valid": True,
            "code": self.code,
            "discount_type": self.discount_type.value if self.discount_type else None,
            "discount_value": str(self.discount_value),
            "discount_amount": self.discount_amount,
        }


def normalize_code(raw_code: str | None) -> str:
    return (raw_code or "").strip().upper()


def _coerce_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def compute_discount(
    discount_type: DiscountType, discount_value: Decimal, base_price: Decimal | int
) -> int:
    """Discount granted on ``base_price``; a fixed discount never exceeds it."""
    base = Decimal(base_price)
    value = Decimal(discount_value)
    if discount_type is DiscountType.PERCENT:
        return to_amount(base * value / Decimal("100"))
    return to_amount(min(value, base))


def _reject(reason: PromoRejection, code: str | None = None) -> PromoValidation:
    return PromoValidation(valid=False, code=code, reason=reason)


async def validate_promo_code(
    store: BookingStore,
    raw_code: str | None,
    base_price: Decimal | int,
    *,
    now: datetime | None = None,
) -> PromoValidation:
    """Check a promo code and preview its discount without consuming a use."""
    code = normalize_code(raw_code)
    if not code:
        return _reject(PromoRejection.EMPTY)

    promo = await store.find_promo_code(code)
    if promo is None:
        return _reject(PromoRejection.UNKNOWN, code)
    if not promo.active:
        return _reject(PromoRejection.INACTIVE, code)

    current = _coerce_utc(now or datetime.now(UTC))
    if promo.expires_at is not None and _coerce_utc(promo.expires_at) < current:
        return _reject(PromoRejection.EXPIRED, code)
    if promo.max_uses is not None and promo.used_count >= promo.max_uses:
        return _reject(PromoRejection.EXHAUSTED, code)

    return PromoValidation(
        valid=True,
        code=code,
        discount_type=promo.discount_type,
        discount_value=Decimal(promo.discount_value),
        discount_amount=compute_discount(
            promo.discount_type, promo.discount_value, base_price
        ),
        promo_code_id=promo.id,
    )


async def redeem_promo_code(
    store: BookingStore,
    validation: PromoValidation,
    *,
    reservation_id: uuid.UUID,
) -> bool:
    """Consume one use of a previously validated code for a reservation."""
    if not validation.valid or validation.promo_code_id is None:
        return False
    redeemed = await store.redeem_promo_code(
        validation.promo_code_id, reservation_id=reservation_id
    )
    if not redeemed:
        logger.warning(
            "Promo code %s reached its usage limit before redemption", validation.code
        )
    return redeemed


async def list_promo_codes(session: AsyncSession) -> list[PromoCode]:
    result = await session.execute(
        select(PromoCode).order_by(PromoCode.created_at.desc())
    )
    return list(result.scalars().all())


async def get_promo_code(
    session: AsyncSession, promo_code_id: uuid.UUID
) -> PromoCode | None:
    return await session.get(PromoCode, promo_code_id)


async def create_promo_code(
    session: AsyncSession,
    *,
    code: str,
    discount_type: DiscountType,
    discount_value: Decimal,
    expires_at: datetime | None = None,
    max_uses: int | None = None,
) -> ServiceResult[PromoCode]:
    """Create a new active promo code with a normalized, unique code."""
    normalized = normalize_code(code)
    if not normalized:
        return ServiceResult.failure(ErrorCode.INVALID_INPUT, "Promo code is required")
    if discount_value <= 0:
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "Discount value must be positive"
        )
    if discount_type is DiscountType.PERCENT and discount_value > 100:
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "Percent discount cannot exceed 100"
        )
    if max_uses is not None and max_uses < 1:
        return ServiceResult.failure(
            ErrorCode.INVALID_INPUT, "Usage limit must be at least 1"
        )

    existing = await session.execute(
        select(PromoCode.id).where(PromoCode.code == normalized)
    )
    if existing.scalar_one_or_none() is not None:
        return ServiceResult.failure(
            ErrorCode.DUPLICATE_CODE, "This promo code already exists"
        )

    promo = PromoCode(
        code=normalized,
        discount_type=discount_type,
        discount_value=discount_value,
        active=True,
        expires_at=expires_at,
        max_uses=max_uses,
        used_count=0,
    )
    session.add(promo)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        return ServiceResult.failure(
            ErrorCode.DUPLICATE_CODE, "This promo code already exists"
        )
    await session.refresh(promo)
    logger.info("Created promo code %s", promo.code)
    return ServiceResult.success(promo)


async def set_promo_code_active(
    session: AsyncSession, *, promo_code_id: uuid.UUID, active: bool
) -> ServiceResult[PromoCode]:
    promo = await session.get(PromoCode, promo_code_id)
    if promo is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Promo code not found")
    promo.active = active
    await session.commit()
    await session.refresh(promo)
    return ServiceResult.success(promo)


async def delete_promo_code(
    session: AsyncSession, *, promo_code_id: uuid.UUID
) -> ServiceResult[None]:
    promo = await session.get(PromoCode, promo_code_id)
    if promo is None:
        return ServiceResult.failure(ErrorCode.NOT_FOUND, "Promo code not found")
    await session.delete(promo)
    await session.commit()
    return ServiceResult.success(None)
