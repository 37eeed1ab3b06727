"""Pydantic schemas for posts and the author summary joined onto them."""

from datetime import datetime

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 255
CONTENT_MIN_LENGTH = 10
# Cap for abuse prevention; posts are plain text.
CONTENT_MAX_LENGTH = 50_000


class PostCreate(BaseModel):
    """Payload for creating a post; the owner comes from the bearer token."""

    title: str = Field(
        ...,
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
        description="Post title (at least 3 characters).",
    )
    content: str = Field(
        ...,
        min_length=CONTENT_MIN_LENGTH,
        max_length=CONTENT_MAX_LENGTH,
        description="Post body (at least 10 characters).",
    )


class PostUpdate(BaseModel):
    """Partial update of title and/or content. The owner cannot be changed."""

    title: str | None = Field(
        default=None, min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH
    )
    content: str | None = Field(
        default=None, min_length=CONTENT_MIN_LENGTH, max_length=CONTENT_MAX_LENGTH
    )


class PostAuthor(BaseModel):
    """Denormalized summary of the post owner, read at query time."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str


class PostWithAuthor(BaseModel):
    """Post enriched with its author summary (serialized with camelCase timestamps)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    user: PostAuthor
