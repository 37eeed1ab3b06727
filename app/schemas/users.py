"""Request/response schemas for user registration and self-service account management."""

from datetime import datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class UserCreate(BaseModel):
    """Registration payload."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        description="Unique username (at least 3 characters)",
    )
    email: EmailStr = Field(..., description="Unique, valid email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Plain password (at least 6 characters); stored as a bcrypt hash",
    )


class UserUpdate(BaseModel):
    """
    Partial update: each field is either supplied or left as None.

    Only supplied fields are applied; omitted fields keep their stored value.
    """

    username: str | None = Field(
        default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN
    )
    email: EmailStr | None = None
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class UserPublic(BaseModel):
    """User as returned to callers. Never carries the password hash."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
