"""Service layer exports."""
from staybook.services import (
    accommodation_service,
    availability_service,
    pack_service,
    partner_service,
    promo_code_service,
    reservation_service,
)

__all__ = [
    "accommodation_service",
    "availability_service",
    "pack_service",
    "partner_service",
    "promo_code_service",
    "reservation_service",
]
