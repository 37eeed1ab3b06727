"""Post endpoints: public reads, bearer-authenticated writes restricted to the owner."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.posts import PostCreate, PostUpdate, PostWithAuthor
from app.services import posts as posts_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=PostWithAuthor, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostWithAuthor:
    """Create a post owned by the authenticated caller."""
    logger.debug("Creating post for user: %s", current_user.id)
    return posts_service.create_post(db, body, current_user.id)


@router.get("", response_model=list[PostWithAuthor])
def list_posts(db: Annotated[Session, Depends(get_db)]) -> list[PostWithAuthor]:
    """List all posts with author summary, newest first."""
    return posts_service.list_posts(db)


@router.get("/{post_id}", response_model=PostWithAuthor)
def get_post(post_id: str, db: Annotated[Session, Depends(get_db)]) -> PostWithAuthor:
    return posts_service.get_post(db, post_id)


@router.patch("/{post_id}", response_model=PostWithAuthor)
def update_post(
    post_id: str,
    body: PostUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostWithAuthor:
    """Update title and/or content. Only the owner may do this (403 otherwise)."""
    logger.debug("Updating post %s for user: %s", post_id, current_user.id)
    return posts_service.update_post(db, post_id, body, current_user.id)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    logger.debug("Deleting post %s for user: %s", post_id, current_user.id)
    posts_service.delete_post(db, post_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
