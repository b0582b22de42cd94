"""Versioned API router."""

from fastapi import APIRouter

from . import (
    accommodations,
    auth,
    health,
    packs,
    partners,
    promo_codes,
    reservations,
    stats,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(
    accommodations.router, prefix="/accommodations", tags=["accommodations"]
)
router.include_router(promo_codes.router, prefix="/promo-codes", tags=["promo-codes"])
router.include_router(packs.router, prefix="/packs", tags=["packs"])

router.include_router(
    accommodations.admin_router,
    prefix="/admin/accommodations",
    tags=["admin"],
)
router.include_router(
    reservations.admin_router, prefix="/admin/reservations", tags=["admin"]
)
router.include_router(
    promo_codes.admin_router, prefix="/admin/promo-codes", tags=["admin"]
)
router.include_router(
    partners.admin_router, prefix="/admin/partners", tags=["admin"]
)
router.include_router(packs.admin_router, prefix="/admin/packs", tags=["admin"])
router.include_router(
    packs.admin_requests_router, prefix="/admin/pack-requests", tags=["admin"]
)
router.include_router(stats.admin_router, prefix="/admin/stats", tags=["admin"])

__all__ = ["router"]
