"""Liveness and database readiness check."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from staybook.api import deps
from staybook.core.config import get_settings
from staybook.db.session import Database

router = APIRouter()


@router.get("", summary="Service and database status")
async def healthcheck(
    response: Response,
    database: Annotated[Database, Depends(deps.get_database)],
) -> dict[str, Any]:
    """Report whether the booking database answers; 503 when it does not."""
    settings = get_settings()
    db_status = await database.ping()
    healthy = db_status["status"] == "up"
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ok" if healthy else "degraded",
        "service": settings.app_name,
        "environment": settings.app_env,
        "database": db_status,
    }
