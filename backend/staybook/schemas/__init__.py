"""Schema exports."""

from staybook.schemas.accommodation import (
    AccommodationCreate,
    AccommodationRead,
    AccommodationUpdate,
    AvailabilityUpdate,
    UnavailableDatesRead,
)
from staybook.schemas.auth import Token
from staybook.schemas.pack import (
    PackCreate,
    PackRead,
    PackRequestCreate,
    PackRequestRead,
    PackRequestStatusUpdate,
    PackUpdate,
)
from staybook.schemas.partner import (
    PartnerContactRead,
    PartnerCreate,
    PartnerPublicRead,
    PartnerRead,
    PartnerUpdate,
)
from staybook.schemas.promo_code import (
    PromoCodeCreate,
    PromoCodeRead,
    PromoCodeToggle,
    PromoCodeValidateRequest,
    PromoCodeValidationRead,
)
from staybook.schemas.reporting import AdminStatsRead, PartnerCommissionRead
from staybook.schemas.reservation import (
    BookingConflictRead,
    PaymentStatusUpdate,
    ReservationCreate,
    ReservationCreated,
    ReservationRead,
    ReservationStatusUpdate,
)

__all__ = [
    "AccommodationCreate",
    "AccommodationRead",
    "AccommodationUpdate",
    "AdminStatsRead",
    "AvailabilityUpdate",
    "BookingConflictRead",
    "PackCreate",
    "PackRead",
    "PackRequestCreate",
    "PackRequestRead",
    "PackRequestStatusUpdate",
    "PackUpdate",
    "PartnerCommissionRead",
    "PartnerContactRead",
    "PartnerCreate",
    "PartnerPublicRead",
    "PartnerRead",
    "PartnerUpdate",
    "PaymentStatusUpdate",
    "PromoCodeCreate",
    "PromoCodeRead",
    "PromoCodeToggle",
    "PromoCodeValidateRequest",
    "PromoCodeValidationRead",
    "ReservationCreate",
    "ReservationCreated",
    "ReservationRead",
    "ReservationStatusUpdate",
    "Token",
    "UnavailableDatesRead",
]
