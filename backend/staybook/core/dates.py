"""Calendar helpers for nightly stays.

Stays are expressed as half-open ranges ``[check_in, check_out)``: the guest
occupies the night of ``check_in`` through the night before ``check_out``.
Dates carry no time-of-day or timezone component.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True, slots=True)
class DateRange:
    """Check-in/check-out pair for a stay."""

    check_in: date
    check_out: date

    @property
    def nights(self) -> int:
        return count_nights(self.check_in, self.check_out)

    @property
    def is_valid(self) -> bool:
        return self.nights > 0

    def overlaps(self, other: DateRange) -> bool:
        """Half-open overlap test; touching ranges do not overlap."""
        return self.check_in < other.check_out and self.check_out > other.check_in

    def dates(self) -> Iterator[date]:
        return enumerate_dates(self.check_in, self.check_out)


def count_nights(check_in: date, check_out: date) -> int:
    """Return the whole-day difference; zero or negative for malformed input."""
    return (check_out - check_in).days


def enumerate_dates(check_in: date, check_out: date) -> Iterator[date]:
    """Yield every occupied night, excluding the check-out date itself."""
    current = check_in
    while current < check_out:
        yield current
        current += timedelta(days=1)
