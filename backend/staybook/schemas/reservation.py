"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from staybook.models.reservation import PaymentMethod, PaymentStatus, ReservationStatus
from staybook.schemas.partner import PartnerContactRead


class ReservationCreate(BaseModel):
    """Booking request submitted by a guest."""

    guest_first_name: str = Field(min_length=1, max_length=120)
    guest_last_name: str = Field(min_length=1, max_length=120)
    guest_email: EmailStr
    guest_phone: str = Field(min_length=3, max_length=40)
    check_in: date
    check_out: date
    guests: int = Field(ge=1)
    payment_method: PaymentMethod
    notes: str | None = Field(default=None, max_length=2048)
    promo_code: str | None = Field(default=None, max_length=64)
    user_id: uuid.UUID | None = None


class ReservationStatusUpdate(BaseModel):
    """Administrative decision on a pending reservation."""

    status: ReservationStatus
    admin_notes: str | None = Field(default=None, max_length=2048)
    cancellation_reason: str | None = Field(default=None, max_length=1024)


class PaymentStatusUpdate(BaseModel):
    """Payment tracking update recorded by an administrator."""

    status: PaymentStatus
    payment_reference: str | None = Field(default=None, max_length=120)


class ReservationAccommodationRead(BaseModel):
    id: uuid.UUID
    name: str
    slug: str
    location: str | None = None
    partner: PartnerContactRead | None = None

    model_config = ConfigDict(from_attributes=True)


class ReservationRead(BaseModel):
    """Serialized reservation representation."""

    id: uuid.UUID
    reference: str
    accommodation_id: uuid.UUID
    accommodation: ReservationAccommodationRead | None = None
    user_id: uuid.UUID | None = None
    guest_first_name: str
    guest_last_name: str
    guest_email: str
    guest_phone: str
    check_in: date
    check_out: date
    guests: int
    nights: int
    price_per_night: int
    subtotal: int
    commission_rate: Decimal
    commission_amount: int
    promo_code: str | None = None
    discount_amount: int | None = None
    total_price: int
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    payment_reference: str | None = None
    payment_date: datetime | None = None
    reservation_status: ReservationStatus
    confirmed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    notes: str | None = None
    admin_notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationCreated(BaseModel):
    """Identifiers returned once a booking request has been recorded."""

    id: uuid.UUID
    reference: str
    total_price: int
    discount_amount: int | None = None
    reservation_status: ReservationStatus
    payment_status: PaymentStatus

    model_config = ConfigDict(from_attributes=True)


class BookingConflictRead(BaseModel):
    """A pending request overlapping an already confirmed stay."""

    pending: ReservationRead
    confirmed: ReservationRead
