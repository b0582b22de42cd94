"""Tests for the pricing calculator."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from staybook.services import pricing_service


def test_calculate_reservation_is_exact() -> None:
    amounts = pricing_service.calculate_reservation(
        100_000, date(2025, 7, 1), date(2025, 7, 4), Decimal("10")
    )
    assert amounts.nights == 3
    assert amounts.subtotal == Decimal("300000")
    assert amounts.commission_amount == Decimal("30000")


def test_commission_keeps_fractional_part_until_rounding() -> None:
    amounts = pricing_service.calculate_reservation(
        33_333, date(2025, 7, 1), date(2025, 7, 2), Decimal("12.5")
    )
    assert amounts.commission_amount == Decimal("4166.625")
    assert amounts.to_dict() == {
        "nights": 1,
        "subtotal": 33_333,
        "commission_amount": 4167,
    }


def test_malformed_range_yields_non_positive_nights() -> None:
    amounts = pricing_service.calculate_reservation(
        50_000, date(2025, 7, 4), date(2025, 7, 1), 10
    )
    assert amounts.nights == -3
    assert amounts.subtotal == Decimal("-150000")


def test_to_amount_rounds_half_up() -> None:
    assert pricing_service.to_amount(Decimal("2.5")) == 3
    assert pricing_service.to_amount(Decimal("2.49")) == 2
    assert pricing_service.to_amount("1000") == 1000


def test_apply_discount_never_goes_below_zero() -> None:
    assert pricing_service.apply_discount(Decimal("300000"), 30_000) == 270_000
    assert pricing_service.apply_discount(Decimal("300000"), None) == 300_000
    assert pricing_service.apply_discount(5_000, 8_000) == 0
