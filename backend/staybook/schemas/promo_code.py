"""Promo code schema definitions."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from staybook.models.promo_code import DiscountType


class PromoCodeValidateRequest(BaseModel):
    """Preview a promo code against the price of a stay."""

    code: str = Field(max_length=64)
    total_price: int = Field(ge=0)


class PromoCodeValidationRead(BaseModel):
    """Discount preview for a valid promo code."""

    valid: bool
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    discount_amount: int


class PromoCodeCreate(BaseModel):
    """Input payload for a new promo code."""

    code: str = Field(min_length=1, max_length=64)
    discount_type: DiscountType
    discount_value: Decimal = Field(gt=Decimal("0"))
    expires_at: datetime | None = None
    max_uses: int | None = Field(default=None, ge=1)


class PromoCodeToggle(BaseModel):
    active: bool


class PromoCodeRead(BaseModel):
    """Promo code as shown in the administration screens."""

    id: uuid.UUID
    code: str
    discount_type: DiscountType
    discount_value: Decimal
    active: bool
    expires_at: datetime | None = None
    max_uses: int | None = None
    used_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
