"""Pricing calculator for nightly stays."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from staybook.core.dates import count_nights

WHOLE_UNIT = Decimal("1")


@dataclass(frozen=True, slots=True)
class ReservationAmounts:
    """Exact (unrounded) amounts derived from a nightly price and a stay."""

    nights: int
    subtotal: Decimal
    commission_amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "nights": self.nights,
            "subtotal": to_amount(self.subtotal),
            "commission_amount": to_amount(self.commission_amount),
        }


def to_amount(value: Decimal | int | float | str) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP))


def calculate_reservation(
    price_per_night: Decimal | int,
    check_in: datetime.date,
    check_out: datetime.date,
    commission_rate: Decimal | int | float,
) -> ReservationAmounts:
    """Derive nights, subtotal and commission for a stay.

    Malformed ranges are not rejected here: they produce ``nights <= 0`` and
    the caller is expected to refuse the request.
    """
    nights = count_nights(check_in, check_out)
    subtotal = Decimal(price_per_night) * nights
    commission_amount = subtotal * Decimal(str(commission_rate)) / Decimal("100")
    return ReservationAmounts(
        nights=nights,
        subtotal=subtotal,
        commission_amount=commission_amount,
    )


def apply_discount(subtotal: Decimal | int, discount_amount: int | None) -> int:
    """Return the payable total, never below zero."""
    total = to_amount(subtotal) - (discount_amount or 0)
    return max(total, 0)
