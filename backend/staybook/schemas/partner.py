"""Partner schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class PartnerBase(BaseModel):
    """Shared partner fields."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    description: str | None = None
    address: str | None = Field(default=None, max_length=255)
    iban: str | None = Field(default=None, max_length=64)
    logo_url: str | None = Field(default=None, max_length=500)


class PartnerCreate(PartnerBase):
    """Payload for registering a partner."""


class PartnerUpdate(BaseModel):
    """Mutable partner fields."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    description: str | None = None
    address: str | None = Field(default=None, max_length=255)
    iban: str | None = Field(default=None, max_length=64)
    logo_url: str | None = Field(default=None, max_length=500)
    active: bool | None = None


class PartnerRead(PartnerBase):
    """Full partner record for administrators."""

    id: uuid.UUID
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PartnerPublicRead(BaseModel):
    """Partner details shown next to a public listing."""

    id: uuid.UUID
    name: str
    description: str | None = None
    address: str | None = None
    logo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class PartnerContactRead(BaseModel):
    """Partner contact shown on administrative reservation views."""

    id: uuid.UUID
    name: str
    email: str | None = None
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)
