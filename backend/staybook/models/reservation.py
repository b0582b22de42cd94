"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staybook.db.base import Base
from staybook.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from staybook.models.accommodation import Accommodation


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Lifecycle states for the payment attached to a reservation."""

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    """Offline payment channels offered to guests."""

    ORANGE_MONEY = "orange_money"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"


class Reservation(TimestampMixin, Base):
    """A guest's request for a stay, with its pricing snapshot."""

    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="RESTRICT"), nullable=False
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    guest_first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    guest_last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    guest_email: Mapped[str] = mapped_column(String(255), nullable=False)
    guest_phone: Mapped[str] = mapped_column(String(40), nullable=False)

    check_in: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    guests: Mapped[int] = mapped_column(Integer, nullable=False)
    nights: Mapped[int] = mapped_column(Integer, nullable=False)

    price_per_night: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal: Mapped[int] = mapped_column(Integer, nullable=False)
    commission_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    commission_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    promo_code: Mapped[str | None] = mapped_column(String(64))
    discount_amount: Mapped[int | None] = mapped_column(Integer)
    total_price: Mapped[int] = mapped_column(Integer, nullable=False)

    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod), nullable=False
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    payment_reference: Mapped[str | None] = mapped_column(String(120))
    payment_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    reservation_status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus),
        default=ReservationStatus.PENDING,
        nullable=False,
        index=True,
    )
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    cancellation_reason: Mapped[str | None] = mapped_column(String(1024))

    notes: Mapped[str | None] = mapped_column(String(2048))
    admin_notes: Mapped[str | None] = mapped_column(String(2048))

    accommodation: Mapped["Accommodation"] = relationship(
        "Accommodation", lazy="joined"
    )

    @property
    def reference(self) -> str:
        """Short human-facing booking reference."""
        return self.id.hex[-8:].upper()
