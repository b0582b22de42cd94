"""Administrator authentication."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from staybook.core.security import ADMIN_ROLE, authenticate_admin, create_access_token
from staybook.schemas.auth import Token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=Token, summary="Obtain access token")
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
) -> Token:
    """Validate the administrator credentials and issue a bearer token."""
    if not authenticate_admin(form_data.username, form_data.password):
        logger.warning("Rejected administrator login")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_access_token(
        form_data.username.strip().lower(), role=ADMIN_ROLE
    )
    return Token(access_token=access_token)
