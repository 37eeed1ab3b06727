"""Authentication: credential validation, login token pairs, refresh and bearer checks."""

import logging

import jwt
from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError, NotFoundError, UnauthorizedError
from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    verify_password,
)
from app.schemas.auth import AccessTokenResponse, CurrentUser, LoginResponse, LoginUser
from app.schemas.users import UserPublic
from app.services.users import find_by_username, get_user

logger = logging.getLogger(__name__)


def validate_user(db: Session, username: str, password: str) -> UserPublic:
    """
    Check username/password against the stored bcrypt hash.

    Raises UnauthorizedError with "Username not found" or "Invalid password";
    login() does not pass those messages on to the client.
    """
    logger.debug("Attempting to validate user: %s", username)
    user = find_by_username(db, username)
    if user is None:
        logger.debug("User not found: %s", username)
        raise UnauthorizedError("Username not found")

    if not verify_password(password, user.password_hash):
        logger.debug("Invalid password for user: %s", username)
        raise UnauthorizedError("Invalid password")

    logger.debug("User validated successfully: %s", username)
    return UserPublic.model_validate(user)


def login(db: Session, username: str, password: str) -> LoginResponse:
    """Validate credentials and issue an access token (1h) and a refresh token (7d)."""
    logger.debug("Login attempt for user: %s", username)
    try:
        user = validate_user(db, username, password)
        access_token = create_access_token(user.id, user.username)
        refresh_token = create_refresh_token(user.id, user.username)
    except UnauthorizedError as e:
        logger.info("Login rejected for user %s: %s", username, e.message)
        raise UnauthorizedError("Invalid username or password") from None
    except Exception:
        logger.exception("Login failed for user %s", username)
        raise UnauthorizedError("Login failed") from None

    logger.debug("Login successful for user: %s", username)
    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        user=LoginUser(id=user.id, username=user.username, email=user.email),
    )


def refresh_access_token(db: Session, refresh_token: str) -> AccessTokenResponse:
    """
    Exchange a valid refresh token for a new access token bound to the same subject.

    The refresh token itself is not rotated. A token whose subject no longer
    exists is rejected.
    """
    try:
        payload = decode_token(refresh_token, "refresh")
    except jwt.PyJWTError as e:
        logger.debug("Refresh token rejected: %s", e)
        raise UnauthorizedError("Invalid or expired refresh token") from None

    try:
        user = get_user(db, payload["sub"])
    except (NotFoundError, InvalidInputError):
        raise UnauthorizedError("Invalid or expired refresh token") from None

    return AccessTokenResponse(access_token=create_access_token(user.id, user.username))


def authenticate_bearer(db: Session, token: str) -> CurrentUser:
    """Verify an access token and return the caller it identifies."""
    try:
        payload = decode_token(token, "access")
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid or expired token") from None

    try:
        user = get_user(db, payload["sub"])
    except (NotFoundError, InvalidInputError):
        raise UnauthorizedError("User not found") from None

    return CurrentUser(id=user.id, username=user.username, email=user.email)
