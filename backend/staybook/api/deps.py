"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from staybook.core.config import get_settings
from staybook.core.security import ADMIN_ROLE, decode_access_token
from staybook.db.session import Database
from staybook.db.store import SqlAlchemyBookingStore

settings = get_settings()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_v1_prefix}/auth/token")


def get_database(request: Request) -> Database:
    """Return the database handle created by the application lifespan."""
    return request.app.state.database


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in database.session():
        yield session


async def get_booking_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> SqlAlchemyBookingStore:
    """Wrap the request session in the booking store used by the services."""
    return SqlAlchemyBookingStore(session)


async def require_admin(
    token: Annotated[str, Depends(oauth2_scheme)],
) -> dict[str, Any]:
    """Authenticate the request as the administrator via bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
    except JWTError as exc:
        raise credentials_exception from exc

    if payload.get("sub") is None:
        raise credentials_exception
    if payload.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )
    return payload
