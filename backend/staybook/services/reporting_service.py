"""Dashboard figures for administrators."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.models.accommodation import Accommodation
from staybook.models.pack import PackRequest, PackRequestStatus
from staybook.models.partner import Partner
from staybook.models.reservation import PaymentStatus, Reservation, ReservationStatus
from staybook.schemas.reporting import AdminStatsRead, PartnerCommissionRead


async def get_admin_stats(session: AsyncSession) -> AdminStatsRead:
    """Reservation counts per status and money figures.

    Revenue and commission only count confirmed reservations. The pending
    payment total covers non-cancelled reservations whose payment is still
    outstanding.
    """
    counts_result = await session.execute(
        select(Reservation.reservation_status, func.count(Reservation.id)).group_by(
            Reservation.reservation_status
        )
    )
    counts = {status: count for status, count in counts_result.all()}

    money_result = await session.execute(
        select(
            func.coalesce(func.sum(Reservation.total_price), 0),
            func.coalesce(func.sum(Reservation.commission_amount), 0),
        ).where(Reservation.reservation_status == ReservationStatus.CONFIRMED)
    )
    revenue, commission = money_result.one()

    pending_payment = await session.scalar(
        select(func.coalesce(func.sum(Reservation.total_price), 0)).where(
            Reservation.payment_status == PaymentStatus.PENDING,
            Reservation.reservation_status != ReservationStatus.CANCELLED,
        )
    )
    new_requests = await session.scalar(
        select(func.count(PackRequest.id)).where(
            PackRequest.status == PackRequestStatus.NEW
        )
    )

    return AdminStatsRead(
        total_reservations=sum(counts.values()),
        pending_reservations=counts.get(ReservationStatus.PENDING, 0),
        confirmed_reservations=counts.get(ReservationStatus.CONFIRMED, 0),
        cancelled_reservations=counts.get(ReservationStatus.CANCELLED, 0),
        total_revenue=int(revenue),
        total_commission=int(commission),
        pending_payment=int(pending_payment or 0),
        new_pack_requests=int(new_requests or 0),
    )


async def list_partner_commissions(
    session: AsyncSession,
) -> list[PartnerCommissionRead]:
    """Per-partner totals over confirmed reservations, largest commission first."""
    commission = func.sum(Reservation.commission_amount)
    result = await session.execute(
        select(
            Partner.id,
            Partner.name,
            func.count(Reservation.id),
            func.sum(Reservation.total_price),
            commission,
        )
        .select_from(Reservation)
        .join(Accommodation, Accommodation.id == Reservation.accommodation_id)
        .join(Partner, Partner.id == Accommodation.partner_id)
        .where(Reservation.reservation_status == ReservationStatus.CONFIRMED)
        .group_by(Partner.id, Partner.name)
        .order_by(commission.desc(), Partner.name.asc())
    )
    return [
        PartnerCommissionRead(
            partner_id=partner_id,
            partner_name=name,
            confirmed_reservations=int(count),
            total_revenue=int(revenue or 0),
            commission_due=int(due or 0),
        )
        for partner_id, name, count, revenue, due in result.all()
    ]
