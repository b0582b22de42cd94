"""Record store used by the booking services.

Services never open sessions or reach for a global client: each request builds
one store around its own ``AsyncSession`` and passes it in. The store is the
request's unit of work; nothing is persisted until ``commit`` is awaited.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Protocol

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.core.dates import DateRange
from staybook.models.accommodation import Accommodation, AvailabilityBlock
from staybook.models.promo_code import PromoCode, PromoRedemption
from staybook.models.reservation import PaymentStatus, Reservation, ReservationStatus


class BookingStore(Protocol):
    """Backend-agnostic operations the booking engine depends on."""

    async def get_accommodation(
        self, accommodation_id: uuid.UUID
    ) -> Accommodation | None: ...

    async def list_blocked_dates(
        self,
        accommodation_id: uuid.UUID,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> set[date]: ...

    async def list_confirmed_reservations(
        self,
        accommodation_id: uuid.UUID,
        overlapping: DateRange,
        *,
        exclude_reservation_id: uuid.UUID | None = None,
    ) -> list[DateRange]: ...

    async def add_reservation(self, reservation: Reservation) -> uuid.UUID: ...

    async def get_reservation(self, reservation_id: uuid.UUID) -> Reservation | None: ...

    async def find_promo_code(self, code: str) -> PromoCode | None: ...

    async def redeem_promo_code(
        self, promo_code_id: uuid.UUID, *, reservation_id: uuid.UUID
    ) -> bool: ...

    async def update_reservation_status(
        self,
        reservation_id: uuid.UUID,
        status: ReservationStatus,
        *,
        confirmed_at: datetime | None = None,
        cancelled_at: datetime | None = None,
        cancellation_reason: str | None = None,
        admin_notes: str | None = None,
    ) -> None: ...

    async def update_payment_status(
        self,
        reservation_id: uuid.UUID,
        status: PaymentStatus,
        *,
        payment_date: datetime | None = None,
        payment_reference: str | None = None,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class SqlAlchemyBookingStore:
    """``BookingStore`` backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def get_accommodation(
        self, accommodation_id: uuid.UUID
    ) -> Accommodation | None:
        return await self._session.get(Accommodation, accommodation_id)

    async def list_blocked_dates(
        self,
        accommodation_id: uuid.UUID,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> set[date]:
        stmt = select(AvailabilityBlock.day).where(
            AvailabilityBlock.accommodation_id == accommodation_id
        )
        if start is not None:
            stmt = stmt.where(AvailabilityBlock.day >= start)
        if end is not None:
            stmt = stmt.where(AvailabilityBlock.day < end)
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def list_confirmed_reservations(
        self,
        accommodation_id: uuid.UUID,
        overlapping: DateRange,
        *,
        exclude_reservation_id: uuid.UUID | None = None,
    ) -> list[DateRange]:
        stmt = select(Reservation.check_in, Reservation.check_out).where(
            Reservation.accommodation_id == accommodation_id,
            Reservation.reservation_status == ReservationStatus.CONFIRMED,
            Reservation.check_in < overlapping.check_out,
            Reservation.check_out > overlapping.check_in,
        )
        if exclude_reservation_id is not None:
            stmt = stmt.where(Reservation.id != exclude_reservation_id)
        result = await self._session.execute(stmt.order_by(Reservation.check_in))
        return [DateRange(check_in, check_out) for check_in, check_out in result.all()]

    async def add_reservation(self, reservation: Reservation) -> uuid.UUID:
        self._session.add(reservation)
        await self._session.flush()
        return reservation.id

    async def get_reservation(self, reservation_id: uuid.UUID) -> Reservation | None:
        return await self._session.get(Reservation, reservation_id)

    async def find_promo_code(self, code: str) -> PromoCode | None:
        result = await self._session.execute(
            select(PromoCode).where(PromoCode.code == code).limit(1)
        )
        return result.scalar_one_or_none()

    async def redeem_promo_code(
        self, promo_code_id: uuid.UUID, *, reservation_id: uuid.UUID
    ) -> bool:
        """Consume one use of a promo code for a reservation.

        The increment is a single conditional UPDATE, so two concurrent
        redemptions cannot push ``used_count`` past ``max_uses``. A reservation
        redeems at most once: replays return True without incrementing again.
        Returns False when the usage ceiling has been reached.
        """
        existing = await self._session.execute(
            select(PromoRedemption.id).where(
                PromoRedemption.reservation_id == reservation_id
            )
        )
        if existing.scalar_one_or_none() is not None:
            return True

        stmt = (
            update(PromoCode)
            .where(
                PromoCode.id == promo_code_id,
                or_(
                    PromoCode.max_uses.is_(None),
                    PromoCode.used_count < PromoCode.max_uses,
                ),
            )
            .values(used_count=PromoCode.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return False

        self._session.add(
            PromoRedemption(promo_code_id=promo_code_id, reservation_id=reservation_id)
        )
        await self._session.flush()
        return True

    async def update_reservation_status(
        self,
        reservation_id: uuid.UUID,
        status: ReservationStatus,
        *,
        confirmed_at: datetime | None = None,
        cancelled_at: datetime | None = None,
        cancellation_reason: str | None = None,
        admin_notes: str | None = None,
    ) -> None:
        reservation = await self._require_reservation(reservation_id)
        reservation.reservation_status = status
        if confirmed_at is not None:
            reservation.confirmed_at = confirmed_at
        if cancelled_at is not None:
            reservation.cancelled_at = cancelled_at
        if cancellation_reason is not None:
            reservation.cancellation_reason = cancellation_reason
        if admin_notes is not None:
            reservation.admin_notes = admin_notes
        await self._session.flush()

    async def update_payment_status(
        self,
        reservation_id: uuid.UUID,
        status: PaymentStatus,
        *,
        payment_date: datetime | None = None,
        payment_reference: str | None = None,
    ) -> None:
        reservation = await self._require_reservation(reservation_id)
        reservation.payment_status = status
        if payment_date is not None:
            reservation.payment_date = payment_date
        if payment_reference is not None:
            reservation.payment_reference = payment_reference
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def _require_reservation(self, reservation_id: uuid.UUID) -> Reservation:
        reservation = await self._session.get(Reservation, reservation_id)
        if reservation is None:
            raise LookupError(f"Reservation {reservation_id} does not exist")
        return reservation
