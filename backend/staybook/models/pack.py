"""Pack bundles and inquiry requests."""
from __future__ import annotations

import enum
import uuid
from datetime import date

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staybook.db.base import Base
from staybook.models.accommodation import JSONB_TYPE, Accommodation
from staybook.models.mixins import TimestampMixin

pack_accommodations = Table(
    "pack_accommodations",
    Base.metadata,
    Column(
        "pack_id",
        ForeignKey("packs.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "accommodation_id",
        ForeignKey("accommodations.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class PackStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PackRequestStatus(str, enum.Enum):
    """Handling state of a pack inquiry."""

    NEW = "new"
    PROCESSED = "processed"
    CANCELLED = "cancelled"


class Pack(TimestampMixin, Base):
    """A bundle of accommodations sold on inquiry only."""

    __tablename__ = "packs"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False, unique=True)
    pack_type: Mapped[str] = mapped_column(String(60), nullable=False)
    short_description: Mapped[str] = mapped_column(
        String(500), default="", nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text)
    images: Mapped[list[str]] = mapped_column(JSONB_TYPE, default=list, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[PackStatus] = mapped_column(
        Enum(PackStatus), default=PackStatus.ACTIVE, nullable=False
    )

    accommodations: Mapped[list[Accommodation]] = relationship(
        Accommodation, secondary=pack_accommodations, lazy="selectin"
    )


class PackRequest(TimestampMixin, Base):
    """Quote request submitted by a prospective guest for a pack."""

    __tablename__ = "pack_requests"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    pack_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("packs.id", ondelete="SET NULL"), nullable=True
    )
    pack_name: Mapped[str] = mapped_column(String(200), nullable=False)
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(40), nullable=False)
    event_date: Mapped[date | None] = mapped_column(Date)
    guests: Mapped[int | None] = mapped_column(Integer)
    message: Mapped[str | None] = mapped_column(Text)
    promo_code: Mapped[str | None] = mapped_column(String(64))
    status: Mapped[PackRequestStatus] = mapped_column(
        Enum(PackRequestStatus), default=PackRequestStatus.NEW, nullable=False
    )