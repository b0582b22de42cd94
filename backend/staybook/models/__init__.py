"""ORM models package export."""

from staybook.models.accommodation import (
    Accommodation,
    AccommodationStatus,
    AccommodationType,
    AvailabilityBlock,
)
from staybook.models.pack import Pack, PackRequest, PackRequestStatus, PackStatus
from staybook.models.partner import Partner
from staybook.models.promo_code import DiscountType, PromoCode, PromoRedemption
from staybook.models.reservation import (
    PaymentMethod,
    PaymentStatus,
    Reservation,
    ReservationStatus,
)

__all__ = [
    "Accommodation",
    "AccommodationStatus",
    "AccommodationType",
    "AvailabilityBlock",
    "DiscountType",
    "Pack",
    "PackRequest",
    "PackRequestStatus",
    "PackStatus",
    "Partner",
    "PaymentMethod",
    "PaymentStatus",
    "PromoCode",
    "PromoRedemption",
    "Reservation",
    "ReservationStatus",
]
