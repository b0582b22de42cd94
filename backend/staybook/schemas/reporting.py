"""Dashboard statistics schemas."""
from __future__ import annotations

import uuid

from pydantic import BaseModel


class AdminStatsRead(BaseModel):
    """Headline figures for the administration dashboard."""

    total_reservations: int
    pending_reservations: int
    confirmed_reservations: int
    cancelled_reservations: int
    total_revenue: int
    total_commission: int
    pending_payment: int
    new_pack_requests: int


class PartnerCommissionRead(BaseModel):
    """Commission a partner owes on its confirmed stays."""

    partner_id: uuid.UUID
    partner_name: str
    confirmed_reservations: int
    total_revenue: int
    commission_due: int
