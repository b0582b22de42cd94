"""Add partners and link every accommodation to one.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-20
"""

from __future__ import annotations

import uuid

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None

UNASSIGNED_PARTNER = "Unassigned partner"


def upgrade() -> None:
    op.create_table(
        "partners",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255)),
        sa.Column("phone", sa.String(length=40)),
        sa.Column("description", sa.Text()),
        sa.Column("address", sa.String(length=255)),
        sa.Column("iban", sa.String(length=64)),
        sa.Column("logo_url", sa.String(length=500)),
        sa.Column("active", sa.Boolean(), nullable=False),
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
    )

    op.add_column(
        "accommodations",
        sa.Column("partner_id", sa.Uuid(as_uuid=True), nullable=True),
    )

    # Listings created before partners existed are attached to a placeholder.
    connection = op.get_bind()
    has_listings = connection.execute(
        sa.text("SELECT 1 FROM accommodations LIMIT 1")
    ).first()
    if has_listings is not None:
        partners = sa.table(
            "partners",
            sa.column("id", sa.Uuid(as_uuid=True)),
            sa.column("name", sa.String()),
            sa.column("active", sa.Boolean()),
        )
        placeholder_id = uuid.uuid4()
        op.bulk_insert(
            partners,
            [{"id": placeholder_id, "name": UNASSIGNED_PARTNER, "active": True}],
        )
        accommodations = sa.table(
            "accommodations", sa.column("partner_id", sa.Uuid(as_uuid=True))
        )
        connection.execute(accommodations.update().values(partner_id=placeholder_id))

    with op.batch_alter_table("accommodations") as batch_op:
        batch_op.alter_column(
            "partner_id", existing_type=sa.Uuid(as_uuid=True), nullable=False
        )
        batch_op.create_foreign_key(
            "fk_accommodations_partner_id",
            "partners",
            ["partner_id"],
            ["id"],
            ondelete="RESTRICT",
        )
        batch_op.create_index("ix_accommodations_partner_id", ["partner_id"])


def downgrade() -> None:
    with op.batch_alter_table("accommodations") as batch_op:
        batch_op.drop_index("ix_accommodations_partner_id")
        batch_op.drop_constraint("fk_accommodations_partner_id", type_="foreignkey")
        batch_op.drop_column("partner_id")
    op.drop_table("partners")
