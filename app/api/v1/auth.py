"""Login and refresh endpoints plus the bearer-token dependency (get_current_user)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.auth import (
    AccessTokenResponse,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
)
from app.services import auth as auth_service

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns an access and a refresh token.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    return auth_service.login(db, body.username, body.password)


@router.post("/refresh-token", response_model=AccessTokenResponse)
def refresh_token(
    body: RefreshTokenRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AccessTokenResponse:
    """Exchange a refresh token for a new access token."""
    return auth_service.refresh_access_token(db, body.refresh_token)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer access token and return the caller. Raises 401 if missing or invalid."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_service.authenticate_bearer(db, credentials.credentials)
