"""Tests for reservation creation and administrative transitions."""

from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from staybook.db.session import Database
from staybook.db.store import SqlAlchemyBookingStore
from staybook.models import (
    AccommodationStatus,
    DiscountType,
    PaymentMethod,
    PaymentStatus,
    PromoCode,
    PromoRedemption,
    ReservationStatus,
)
from staybook.schemas.reservation import ReservationCreate
from staybook.services import reservation_service
from staybook.services.results import ErrorCode

pytestmark = pytest.mark.asyncio

NOW = datetime(2025, 6, 1, 9, 0, tzinfo=UTC)


def _payload(
    check_in: date = date(2025, 7, 1),
    check_out: date = date(2025, 7, 4),
    **overrides,
) -> ReservationCreate:
    values = {
        "guest_first_name": "Awa",
        "guest_last_name": "Ngo",
        "guest_email": "awa@example.com",
        "guest_phone": "+237600000000",
        "check_in": check_in,
        "check_out": check_out,
        "guests": 2,
        "payment_method": PaymentMethod.ORANGE_MONEY,
    }
    values.update(overrides)
    return ReservationCreate(**values)


async def _seed_promo(session, **overrides) -> PromoCode:
    values = {
        "code": "SUMMER10",
        "discount_type": DiscountType.PERCENT,
        "discount_value": Decimal("10"),
        "active": True,
        "used_count": 0,
    }
    values.update(overrides)
    promo = PromoCode(**values)
    session.add(promo)
    await session.commit()
    return promo


class _FailingCommitStore(SqlAlchemyBookingStore):
    async def commit(self) -> None:
        raise SQLAlchemyError("database is unreachable")


async def test_create_reservation_without_promo(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(
            session, price_per_night=100_000, commission_rate=Decimal("10")
        )
        store = SqlAlchemyBookingStore(session)

        result = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload(), now=NOW
        )

    assert result.ok
    reservation = result.value
    assert reservation.nights == 3
    assert reservation.price_per_night == 100_000
    assert reservation.subtotal == 300_000
    assert reservation.commission_amount == 30_000
    assert reservation.total_price == 300_000
    assert reservation.promo_code is None
    assert reservation.discount_amount is None
    assert reservation.reservation_status is ReservationStatus.PENDING
    assert reservation.payment_status is PaymentStatus.PENDING
    assert reservation.reference == reservation.id.hex[-8:].upper()


async def test_create_reservation_with_percent_promo(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(
            session, price_per_night=100_000, commission_rate=Decimal("10")
        )
        promo = await _seed_promo(session)
        store = SqlAlchemyBookingStore(session)

        result = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(promo_code=" summer10"),
            now=NOW,
        )
        await session.refresh(promo)
        redemptions = await session.scalar(
            select(func.count(PromoRedemption.id)).where(
                PromoRedemption.reservation_id == result.value.id
            )
        )

    assert result.ok
    assert result.value.promo_code == "SUMMER10"
    assert result.value.discount_amount == 30_000
    assert result.value.total_price == 270_000
    assert result.value.commission_amount == 30_000
    assert promo.used_count == 1
    assert redemptions == 1


async def test_invalid_promo_is_dropped_silently(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session, price_per_night=100_000)
        promo = await _seed_promo(session, active=False)
        store = SqlAlchemyBookingStore(session)

        result = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(promo_code="SUMMER10"),
            now=NOW,
        )
        await session.refresh(promo)

    assert result.ok
    assert result.value.promo_code is None
    assert result.value.total_price == 300_000
    assert promo.used_count == 0


async def test_invalid_dates_rejected_before_store_access() -> None:
    store = AsyncMock(spec=SqlAlchemyBookingStore)

    result = await reservation_service.create_reservation(
        store,
        accommodation_id=uuid.uuid4(),
        payload=_payload(date(2025, 7, 4), date(2025, 7, 4)),
    )

    assert result.error is ErrorCode.INVALID_DATES
    store.get_accommodation.assert_not_awaited()
    store.list_blocked_dates.assert_not_awaited()
    store.add_reservation.assert_not_awaited()


async def test_inactive_accommodation_is_not_bookable(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        accommodation.status = AccommodationStatus.INACTIVE
        await session.commit()
        store = SqlAlchemyBookingStore(session)

        inactive = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )

    assert inactive.error is ErrorCode.NOT_FOUND


async def test_guest_count_above_capacity(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session, capacity=2)
        store = SqlAlchemyBookingStore(session)

        result = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload(guests=3)
        )

    assert result.error is ErrorCode.INVALID_GUESTS


async def test_confirmed_overlap_makes_dates_unavailable(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        store = SqlAlchemyBookingStore(session)
        first = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(date(2025, 6, 1), date(2025, 6, 5)),
        )
        await reservation_service.update_reservation_status(
            store, reservation_id=first.value.id, status=ReservationStatus.CONFIRMED
        )

        overlapping = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(date(2025, 6, 4), date(2025, 6, 6)),
        )
        adjacent = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(date(2025, 6, 5), date(2025, 6, 8)),
        )

    assert overlapping.error is ErrorCode.DATES_UNAVAILABLE
    assert adjacent.ok


async def test_pending_double_booking_caught_at_confirmation(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        store = SqlAlchemyBookingStore(session)
        first = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )
        second = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(date(2025, 7, 3), date(2025, 7, 6)),
        )
        assert first.ok and second.ok

        confirmed = await reservation_service.update_reservation_status(
            store,
            reservation_id=first.value.id,
            status=ReservationStatus.CONFIRMED,
            now=NOW,
        )
        assert confirmed.ok
        assert confirmed.value.confirmed_at is not None

        conflicts = await reservation_service.list_booking_conflicts(session)
        assert [(c.pending.id, c.confirmed.id) for c in conflicts] == [
            (second.value.id, first.value.id)
        ]

        rejected = await reservation_service.update_reservation_status(
            store,
            reservation_id=second.value.id,
            status=ReservationStatus.CONFIRMED,
        )

    assert rejected.error is ErrorCode.DATES_UNAVAILABLE


async def test_status_transitions(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        store = SqlAlchemyBookingStore(session)
        created = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )
        reservation_id = created.value.id

        same = await reservation_service.update_reservation_status(
            store, reservation_id=reservation_id, status=ReservationStatus.PENDING
        )
        assert same.error is ErrorCode.INVALID_TRANSITION

        cancelled = await reservation_service.update_reservation_status(
            store,
            reservation_id=reservation_id,
            status=ReservationStatus.CANCELLED,
            cancellation_reason="Guest changed plans",
            admin_notes="Called on the phone",
            now=NOW,
        )
        assert cancelled.ok
        assert cancelled.value.cancelled_at is not None
        assert cancelled.value.cancellation_reason == "Guest changed plans"
        assert cancelled.value.admin_notes == "Called on the phone"

        reopened = await reservation_service.update_reservation_status(
            store, reservation_id=reservation_id, status=ReservationStatus.CONFIRMED
        )
        assert reopened.error is ErrorCode.INVALID_TRANSITION

        missing = await reservation_service.update_reservation_status(
            store, reservation_id=uuid.uuid4(), status=ReservationStatus.CONFIRMED
        )
        assert missing.error is ErrorCode.NOT_FOUND


async def test_payment_requires_confirmed_reservation(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        store = SqlAlchemyBookingStore(session)
        created = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )
        reservation_id = created.value.id

        early = await reservation_service.update_payment_status(
            store, reservation_id=reservation_id, status=PaymentStatus.PAID
        )
        assert early.error is ErrorCode.INVALID_TRANSITION

        await reservation_service.update_reservation_status(
            store, reservation_id=reservation_id, status=ReservationStatus.CONFIRMED
        )
        paid = await reservation_service.update_payment_status(
            store,
            reservation_id=reservation_id,
            status=PaymentStatus.PAID,
            payment_reference="OM-123456",
            now=NOW,
        )
        assert paid.ok
        assert paid.value.payment_status is PaymentStatus.PAID
        assert paid.value.payment_reference == "OM-123456"
        assert paid.value.payment_date is not None

        refunded = await reservation_service.update_payment_status(
            store, reservation_id=reservation_id, status=PaymentStatus.CANCELLED
        )
        assert refunded.error is ErrorCode.INVALID_TRANSITION


async def test_redemption_respects_ceiling_and_is_idempotent(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        promo = await _seed_promo(session, max_uses=1)
        store = SqlAlchemyBookingStore(session)
        first = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )
        second = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )

        assert await store.redeem_promo_code(promo.id, reservation_id=first.value.id)
        assert await store.redeem_promo_code(promo.id, reservation_id=first.value.id)
        assert not await store.redeem_promo_code(
            promo.id, reservation_id=second.value.id
        )
        await store.commit()
        await session.refresh(promo)

    assert promo.used_count == 1


async def test_discount_dropped_when_ceiling_hit_before_redemption(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session, price_per_night=100_000)
        await _seed_promo(session, max_uses=1)
        store = SqlAlchemyBookingStore(session)
        store.redeem_promo_code = AsyncMock(return_value=False)  # type: ignore[method-assign]

        result = await reservation_service.create_reservation(
            store,
            accommodation_id=accommodation.id,
            payload=_payload(promo_code="SUMMER10"),
        )

    assert result.ok
    assert result.value.promo_code is None
    assert result.value.discount_amount is None
    assert result.value.total_price == 300_000


async def test_persistence_failure_is_reported(
    database: Database, make_accommodation
) -> None:
    sessionmaker = database.sessionmaker
    async with sessionmaker() as session:
        accommodation = await make_accommodation(session)
        store = _FailingCommitStore(session)

        result = await reservation_service.create_reservation(
            store, accommodation_id=accommodation.id, payload=_payload()
        )
        listed = await reservation_service.list_reservations(session)

    assert result.error is ErrorCode.PERSISTENCE_ERROR
    assert "database" not in (result.message or "")
    assert listed == []
