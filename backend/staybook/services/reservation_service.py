"""Reservation orchestration and administrative state transitions.

A booking request runs strictly in this order: date range validation,
accommodation lookup, availability check, pricing, optional promo code,
insert, promo redemption, commit. Nothing is retried.

Two guests may both pass the availability check for the same nights and
both end up with ``pending`` requests: pending reservations never occupy
dates. The conflict is caught when an administrator confirms the second one,
because confirmation re-checks overlap against confirmed stays, and
``list_booking_conflicts`` shows such pairs ahead of time.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from staybook.core.dates import DateRange
from staybook.db.store import BookingStore
from staybook.models.accommodation import AccommodationStatus
from staybook.models.reservation import PaymentStatus, Reservation, ReservationStatus
from staybook.schemas.reservation import ReservationCreate
from staybook.services import availability_service, promo_code_service
from staybook.services.pricing_service import (
    apply_discount,
    calculate_reservation,
    to_amount,
)
from staybook.services.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: set(),
    ReservationStatus.CANCELLED: set(),
}

_ALLOWED_PAYMENT_TRANSITIONS: dict[PaymentStatus, set[PaymentStatus]] = {
    PaymentStatus.PENDING: {PaymentStatus.PAID, PaymentStatus.CANCELLED},
    PaymentStatus.PAID: set(),
    PaymentStatus.CANCELLED: set(),
}

_PERSISTENCE_FAILURE = "An error occurred while saving the reservation"


@dataclass(slots=True)
class BookingConflict:
    pending: Reservation
    confirmed: Reservation


async def create_reservation(
    store: BookingStore,
    *,
    accommodation_id: uuid.UUID,
    payload: ReservationCreate,
    now: datetime | None = None,
) -> ServiceResult[Reservation]:
    """Validate, price and record a booking request.

    An invalid or exhausted promo code does not fail the request: the
    reservation is created at full price instead.
    """
    stay = DateRange(payload.check_in, payload.check_out)
    if not stay.is_valid:
        return ServiceResult.failure(
            ErrorCode.INVALID_DATES, "The selected dates are invalid"
        )

    try:
        accommodation = await store.get_accommodation(accommodation_id)
        if accommodation is None or accommodation.status != AccommodationStatus.ACTIVE:
            return ServiceResult.failure(ErrorCode.NOT_FOUND, "Accommodation not found")
        if payload.guests < 1 or payload.guests > accommodation.capacity:
            return ServiceResult.failure(
                ErrorCode.INVALID_GUESTS,
                f"This accommodation hosts at most {accommodation.capacity} guest(s)",
            )

        if not await availability_service.is_available(
            store, accommodation_id, stay.check_in, stay.check_out
        ):
            return ServiceResult.failure(
                ErrorCode.DATES_UNAVAILABLE,
                "These dates are no longer available. Please choose other dates.",
            )

        amounts = calculate_reservation(
            accommodation.price_per_night,
            stay.check_in,
            stay.check_out,
            accommodation.commission_rate,
        )

        promo: promo_code_service.PromoValidation | None = None
        if payload.promo_code:
            validation = await promo_code_service.validate_promo_code(
                store, payload.promo_code, amounts.subtotal, now=now
            )
            if validation.valid:
                promo = validation
            else:
                logger.info(
                    "Ignoring promo code %r for accommodation %s: %s",
                    payload.promo_code,
                    accommodation_id,
                    validation.reason.value if validation.reason else "unknown",
                )

        reservation = Reservation(
            accommodation_id=accommodation.id,
            accommodation=accommodation,
            user_id=payload.user_id,
            guest_first_name=payload.guest_first_name,
            guest_last_name=payload.guest_last_name,
            guest_email=str(payload.guest_email),
            guest_phone=payload.guest_phone,
            check_in=stay.check_in,
            check_out=stay.check_out,
            guests=payload.guests,
            nights=amounts.nights,
            price_per_night=accommodation.price_per_night,
            subtotal=to_amount(amounts.subtotal),
            commission_rate=Decimal(accommodation.commission_rate),
            commission_amount=to_amount(amounts.commission_amount),
            promo_code=promo.code if promo else None,
            discount_amount=promo.discount_amount if promo else None,
            total_price=apply_discount(
                amounts.subtotal, promo.discount_amount if promo else None
            ),
            payment_method=payload.payment_method,
            payment_status=PaymentStatus.PENDING,
            reservation_status=ReservationStatus.PENDING,
            notes=payload.notes or None,
        )
        reservation_id = await store.add_reservation(reservation)

        if promo is not None:
            redeemed = await promo_code_service.redeem_promo_code(
                store, promo, reservation_id=reservation_id
            )
            if not redeemed:
                reservation.promo_code = None
                reservation.discount_amount = None
                reservation.total_price = apply_discount(amounts.subtotal, None)

        await store.commit()
    except SQLAlchemyError:
        logger.exception("Failed to create reservation for %s", accommodation_id)
        await store.rollback()
        return ServiceResult.failure(ErrorCode.PERSISTENCE_ERROR, _PERSISTENCE_FAILURE)

    logger.info(
        "Reservation %s created for accommodation %s (%s to %s)",
        reservation.reference,
        accommodation_id,
        stay.check_in,
        stay.check_out,
    )
    return ServiceResult.success(reservation)


async def update_reservation_status(
    store: BookingStore,
    *,
    reservation_id: uuid.UUID,
    status: ReservationStatus,
    admin_notes: str | None = None,
    cancellation_reason: str | None = None,
    now: datetime | None = None,
) -> ServiceResult[Reservation]:
    """Confirm or cancel a pending reservation."""
    timestamp = now or datetime.now(UTC)
    try:
        reservation = await store.get_reservation(reservation_id)
        if reservation is None:
            return ServiceResult.failure(ErrorCode.NOT_FOUND, "Reservation not found")

        current = reservation.reservation_status
        if status not in _ALLOWED_STATUS_TRANSITIONS.get(current, set()):
            return ServiceResult.failure(
                ErrorCode.INVALID_TRANSITION,
                f"Invalid status transition from {current.value} to {status.value}",
            )

        if status is ReservationStatus.CONFIRMED:
            overlaps = await availability_service.find_confirmed_overlaps(
                store,
                reservation.accommodation_id,
                DateRange(reservation.check_in, reservation.check_out),
                exclude_reservation_id=reservation.id,
            )
            if overlaps:
                return ServiceResult.failure(
                    ErrorCode.DATES_UNAVAILABLE,
                    "Another confirmed reservation already occupies these dates",
                )
            await store.update_reservation_status(
                reservation_id,
                status,
                confirmed_at=timestamp,
                admin_notes=admin_notes,
            )
        else:
            await store.update_reservation_status(
                reservation_id,
                status,
                cancelled_at=timestamp,
                cancellation_reason=cancellation_reason,
                admin_notes=admin_notes,
            )
        await store.commit()
    except SQLAlchemyError:
        logger.exception("Failed to update reservation %s", reservation_id)
        await store.rollback()
        return ServiceResult.failure(ErrorCode.PERSISTENCE_ERROR, _PERSISTENCE_FAILURE)

    logger.info("Reservation %s is now %s", reservation.reference, status.value)
    return ServiceResult.success(reservation)


async def update_payment_status(
    store: BookingStore,
    *,
    reservation_id: uuid.UUID,
    status: PaymentStatus,
    payment_reference: str | None = None,
    now: datetime | None = None,
) -> ServiceResult[Reservation]:
    """Record a payment as received or cancelled.

    A payment can only be marked paid once its reservation is confirmed.
    """
    try:
        reservation = await store.get_reservation(reservation_id)
        if reservation is None:
            return ServiceResult.failure(ErrorCode.NOT_FOUND, "Reservation not found")

        current = reservation.payment_status
        if status not in _ALLOWED_PAYMENT_TRANSITIONS.get(current, set()):
            return ServiceResult.failure(
                ErrorCode.INVALID_TRANSITION,
                f"Invalid payment transition from {current.value} to {status.value}",
            )
        if (
            status is PaymentStatus.PAID
            and reservation.reservation_status is not ReservationStatus.CONFIRMED
        ):
            return ServiceResult.failure(
                ErrorCode.INVALID_TRANSITION,
                "Payment can only be marked paid on a confirmed reservation",
            )

        if status is PaymentStatus.PAID:
            await store.update_payment_status(
                reservation_id,
                status,
                payment_date=now or datetime.now(UTC),
                payment_reference=payment_reference,
            )
        else:
            await store.update_payment_status(reservation_id, status)
        await store.commit()
    except SQLAlchemyError:
        logger.exception("Failed to update payment for reservation %s", reservation_id)
        await store.rollback()
        return ServiceResult.failure(ErrorCode.PERSISTENCE_ERROR, _PERSISTENCE_FAILURE)

    return ServiceResult.success(reservation)


async def list_reservations(
    session: AsyncSession,
    *,
    status: ReservationStatus | None = None,
    accommodation_id: uuid.UUID | None = None,
    user_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> Sequence[Reservation]:
    stmt = select(Reservation).order_by(Reservation.created_at.desc())
    if status is not None:
        stmt = stmt.where(Reservation.reservation_status == status)
    if accommodation_id is not None:
        stmt = stmt.where(Reservation.accommodation_id == accommodation_id)
    if user_id is not None:
        stmt = stmt.where(Reservation.user_id == user_id)
    result = await session.execute(stmt.offset(skip).limit(limit))
    return result.scalars().unique().all()


async def get_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID
) -> Reservation | None:
    return await session.get(Reservation, reservation_id)


async def list_booking_conflicts(
    session: AsyncSession, *, accommodation_id: uuid.UUID | None = None
) -> list[BookingConflict]:
    """Pair each pending request with the confirmed stays it overlaps."""
    pending = aliased(Reservation)
    confirmed = aliased(Reservation)
    stmt = (
        select(pending, confirmed)
        .join(
            confirmed,
            and_(
                confirmed.accommodation_id == pending.accommodation_id,
                confirmed.reservation_status == ReservationStatus.CONFIRMED,
                confirmed.check_in < pending.check_out,
                confirmed.check_out > pending.check_in,
            ),
        )
        .where(pending.reservation_status == ReservationStatus.PENDING)
        .order_by(pending.check_in)
    )
    if accommodation_id is not None:
        stmt = stmt.where(pending.accommodation_id == accommodation_id)
    result = await session.execute(stmt)
    return [BookingConflict(pending=row[0], confirmed=row[1]) for row in result.all()]
