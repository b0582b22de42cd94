"""Accommodation and availability schemas."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from staybook.models.accommodation import AccommodationStatus, AccommodationType
from staybook.schemas.partner import PartnerPublicRead


class AccommodationBase(BaseModel):
    """Shared accommodation fields."""

    name: str = Field(min_length=1, max_length=200)
    partner_id: uuid.UUID
    accommodation_type: AccommodationType
    description: str | None = None
    short_description: str | None = Field(default=None, max_length=500)
    capacity: int = Field(ge=1)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    price_per_night: int = Field(gt=0)
    commission_rate: Decimal = Field(
        default=Decimal("0"), ge=Decimal("0"), le=Decimal("100")
    )
    location: str | None = Field(default=None, max_length=255)
    images: list[str] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list)
    featured: bool = False


class AccommodationCreate(AccommodationBase):
    """Payload for creating accommodations."""


class AccommodationUpdate(BaseModel):
    """Mutable accommodation fields."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    partner_id: uuid.UUID | None = None
    accommodation_type: AccommodationType | None = None
    description: str | None = None
    short_description: str | None = Field(default=None, max_length=500)
    capacity: int | None = Field(default=None, ge=1)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    price_per_night: int | None = Field(default=None, gt=0)
    commission_rate: Decimal | None = Field(
        default=None, ge=Decimal("0"), le=Decimal("100")
    )
    location: str | None = Field(default=None, max_length=255)
    images: list[str] | None = None
    amenities: list[str] | None = None
    featured: bool | None = None
    status: AccommodationStatus | None = None


class AccommodationRead(AccommodationBase):
    """Serialized accommodation representation."""

    id: uuid.UUID
    slug: str
    status: AccommodationStatus
    partner: PartnerPublicRead | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AvailabilityUpdate(BaseModel):
    """Block or release a set of nights."""

    dates: list[date] = Field(min_length=1)
    blocked: bool = True


class UnavailableDatesRead(BaseModel):
    accommodation_id: uuid.UUID
    dates: list[date]
