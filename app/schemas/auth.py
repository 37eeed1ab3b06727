"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Username",
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )


class RefreshTokenRequest(BaseModel):
    """Refresh token obtained from login, exchanged for a new access token."""

    refresh_token: str = Field(..., min_length=1, description="JWT refresh token")


class LoginUser(BaseModel):
    """User summary returned alongside the token pair."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str


class LoginResponse(BaseModel):
    """Access and refresh tokens returned after successful login."""

    access_token: str = Field(..., description="JWT access token (1 hour)")
    refresh_token: str = Field(..., description="JWT refresh token (7 days)")
    token_type: str = Field(default="bearer", description="Token type")
    user: LoginUser


class AccessTokenResponse(BaseModel):
    """New access token issued from a refresh token."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Authenticated caller (id, username, email) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
