"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AccessTokenResponse,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LoginUser,
    RefreshTokenRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.posts import PostAuthor, PostCreate, PostUpdate, PostWithAuthor
from app.schemas.users import UserCreate, UserPublic, UserUpdate

__all__ = [
    "AccessTokenResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "PostAuthor",
    "PostCreate",
    "PostUpdate",
    "PostWithAuthor",
    "RefreshTokenRequest",
    "UserCreate",
    "UserPublic",
    "UserUpdate",
]
