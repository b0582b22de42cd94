"""Accommodation and manual availability models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from staybook.db.base import Base
from staybook.models.mixins import TimestampMixin
from staybook.models.partner import Partner

JSONB_TYPE = JSONB().with_variant(JSON(), "sqlite")


class AccommodationType(str, enum.Enum):
    """Kinds of bookable properties."""

    VILLA = "villa"
    APARTMENT = "apartment"
    ROOM = "room"


class AccommodationStatus(str, enum.Enum):
    """Publication state; inactive listings cannot be booked."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Accommodation(TimestampMixin, Base):
    """A bookable property with a nightly price and guest capacity."""

    __tablename__ = "accommodations"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False, unique=True)
    partner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("partners.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    accommodation_type: Mapped[AccommodationType] = mapped_column(
        Enum(AccommodationType), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text)
    short_description: Mapped[str | None] = mapped_column(String(500))
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    price_per_night: Mapped[int] = mapped_column(Integer, nullable=False)
    commission_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("0"), nullable=False
    )
    location: Mapped[str | None] = mapped_column(String(255))
    images: Mapped[list[str]] = mapped_column(JSONB_TYPE, default=list, nullable=False)
    amenities: Mapped[list[str]] = mapped_column(
        JSONB_TYPE, default=list, nullable=False
    )
    status: Mapped[AccommodationStatus] = mapped_column(
        Enum(AccommodationStatus), default=AccommodationStatus.ACTIVE, nullable=False
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    partner: Mapped[Partner] = relationship(Partner, lazy="joined")


class AvailabilityBlock(Base):
    """A single calendar date an administrator marked as unavailable."""

    __tablename__ = "availability_blocks"
    __table_args__ = (
        UniqueConstraint("accommodation_id", "day", name="uq_availability_block_day"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="CASCADE"), nullable=False
    )
    day: Mapped[date] = mapped_column(Date, nullable=False)
