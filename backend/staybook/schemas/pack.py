"""Pack and pack request schemas."""
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from staybook.models.pack import PackRequestStatus, PackStatus
from staybook.schemas.accommodation import AccommodationRead


class PackBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    pack_type: str = Field(min_length=1, max_length=60)
    short_description: str = Field(default="", max_length=500)
    description: str | None = None
    images: list[str] = Field(default_factory=list)
    featured: bool = False


class PackCreate(PackBase):
    """Payload for creating a pack."""

    accommodation_ids: list[uuid.UUID] = Field(default_factory=list)


class PackUpdate(BaseModel):
    """Mutable pack fields."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    pack_type: str | None = Field(default=None, min_length=1, max_length=60)
    short_description: str | None = Field(default=None, max_length=500)
    description: str | None = None
    images: list[str] | None = None
    featured: bool | None = None
    status: PackStatus | None = None
    accommodation_ids: list[uuid.UUID] | None = None


class PackRead(PackBase):
    id: uuid.UUID
    slug: str
    status: PackStatus
    accommodations: list[AccommodationRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PackRequestCreate(BaseModel):
    """Quote request for a pack."""

    first_name: str = Field(min_length=1, max_length=120)
    last_name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    phone: str = Field(min_length=3, max_length=40)
    event_date: date | None = None
    guests: int | None = Field(default=None, ge=1)
    message: str | None = None
    promo_code: str | None = Field(default=None, max_length=64)


class PackRequestStatusUpdate(BaseModel):
    status: PackRequestStatus


class PackRequestRead(BaseModel):
    id: uuid.UUID
    pack_id: uuid.UUID | None = None
    pack_name: str
    first_name: str
    last_name: str
    email: str
    phone: str
    event_date: date | None = None
    guests: int | None = None
    message: str | None = None
    promo_code: str | None = None
    status: PackRequestStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
