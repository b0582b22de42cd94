"""Initial reservation schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

JSONB_TYPE = postgresql.JSONB().with_variant(sa.JSON(), "sqlite")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "accommodations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=220), nullable=False, unique=True),
        sa.Column(
            "accommodation_type",
            sa.Enum("VILLA", "APARTMENT", "ROOM", name="accommodationtype"),
            nullable=False,
        ),
        sa.Column("description", sa.Text()),
        sa.Column("short_description", sa.String(length=500)),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("bedrooms", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("price_per_night", sa.Integer(), nullable=False),
        sa.Column("commission_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("location", sa.String(length=255)),
        sa.Column("images", JSONB_TYPE, nullable=False),
        sa.Column("amenities", JSONB_TYPE, nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", name="accommodationstatus"),
            nullable=False,
        ),
        sa.Column("featured", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "availability_blocks",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day", sa.Date(), nullable=False),
        sa.UniqueConstraint(
            "accommodation_id", "day", name="uq_availability_block_day"
        ),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Uuid(as_uuid=True)),
        sa.Column("guest_first_name", sa.String(length=120), nullable=False),
        sa.Column("guest_last_name", sa.String(length=120), nullable=False),
        sa.Column("guest_email", sa.String(length=255), nullable=False),
        sa.Column("guest_phone", sa.String(length=40), nullable=False),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False),
        sa.Column("nights", sa.Integer(), nullable=False),
        sa.Column("price_per_night", sa.Integer(), nullable=False),
        sa.Column("subtotal", sa.Integer(), nullable=False),
        sa.Column("commission_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("commission_amount", sa.Integer(), nullable=False),
        sa.Column("promo_code", sa.String(length=64)),
        sa.Column("discount_amount", sa.Integer()),
        sa.Column("total_price", sa.Integer(), nullable=False),
        sa.Column(
            "payment_method",
            sa.Enum("ORANGE_MONEY", "BANK_TRANSFER", "CASH", name="paymentmethod"),
            nullable=False,
        ),
        sa.Column(
            "payment_status",
            sa.Enum("PENDING", "PAID", "CANCELLED", name="paymentstatus"),
            nullable=False,
        ),
        sa.Column("payment_reference", sa.String(length=120)),
        sa.Column("payment_date", sa.DateTime(timezone=True)),
        sa.Column(
            "reservation_status",
            sa.Enum("PENDING", "CONFIRMED", "CANCELLED", name="reservationstatus"),
            nullable=False,
        ),
        sa.Column("confirmed_at", sa.DateTime(timezone=True)),
        sa.Column("cancelled_at", sa.DateTime(timezone=True)),
        sa.Column("cancellation_reason", sa.String(length=1024)),
        sa.Column("notes", sa.String(length=2048)),
        sa.Column("admin_notes", sa.String(length=2048)),
        *_timestamps(),
    )
    op.create_index("ix_reservations_check_in", "reservations", ["check_in"])
    op.create_index("ix_reservations_check_out", "reservations", ["check_out"])
    op.create_index(
        "ix_reservations_reservation_status", "reservations", ["reservation_status"]
    )

    op.create_table(
        "promo_codes",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(length=64), nullable=False, unique=True),
        sa.Column(
            "discount_type",
            sa.Enum("PERCENT", "FIXED", name="discounttype"),
            nullable=False,
        ),
        sa.Column("discount_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True)),
        sa.Column("max_uses", sa.Integer()),
        sa.Column("used_count", sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "promo_redemptions",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "promo_code_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("promo_codes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "reservation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("redeemed_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("reservation_id", name="uq_promo_redemption_reservation"),
    )

    op.create_table(
        "packs",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=220), nullable=False, unique=True),
        sa.Column("pack_type", sa.String(length=60), nullable=False),
        sa.Column("short_description", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("images", JSONB_TYPE, nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "INACTIVE", name="packstatus"),
            nullable=False,
        ),
        *_timestamps(),
    )

    op.create_table(
        "pack_accommodations",
        sa.Column(
            "pack_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("packs.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "accommodation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("accommodations.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "pack_requests",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "pack_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("packs.id", ondelete="SET NULL"),
        ),
        sa.Column("pack_name", sa.String(length=200), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=40), nullable=False),
        sa.Column("event_date", sa.Date()),
        sa.Column("guests", sa.Integer()),
        sa.Column("message", sa.Text()),
        sa.Column("promo_code", sa.String(length=64)),
        sa.Column(
            "status",
            sa.Enum("NEW", "PROCESSED", "CANCELLED", name="packrequeststatus"),
            nullable=False,
        ),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("pack_requests")
    op.drop_table("pack_accommodations")
    op.drop_table("packs")
    op.drop_table("promo_redemptions")
    op.drop_table("promo_codes")
    op.drop_index("ix_reservations_reservation_status", table_name="reservations")
    op.drop_index("ix_reservations_check_out", table_name="reservations")
    op.drop_index("ix_reservations_check_in", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("availability_blocks")
    op.drop_table("accommodations")
    for enum_name in (
        "packrequeststatus",
        "packstatus",
        "discounttype",
        "reservationstatus",
        "paymentstatus",
        "paymentmethod",
        "accommodationstatus",
        "accommodationtype",
    ):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
