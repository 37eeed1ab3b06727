"""Post catalog: CRUD over posts with owner-only mutation and author-joined reads."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.errors import (
    ForbiddenError,
    InternalError,
    InvalidInputError,
    NotFoundError,
)
from app.models import Post, User
from app.models.base import parse_id, utcnow
from app.schemas.posts import PostAuthor, PostCreate, PostUpdate, PostWithAuthor
from app.services.users import get_user

logger = logging.getLogger(__name__)


def _with_author(db: Session) -> Query:
    """Posts inner-joined with their owner; posts whose owner is gone drop out."""
    return db.query(Post, User).join(User, Post.user_id == User.id)


def _to_post_with_author(post: Post, user: User) -> PostWithAuthor:
    return PostWithAuthor(
        id=post.id,
        title=post.title,
        content=post.content,
        created_at=post.created_at,
        updated_at=post.updated_at,
        user=PostAuthor.model_validate(user),
    )


def _load_post(db: Session, post_id: str) -> Post:
    try:
        canonical_id = parse_id(post_id)
    except ValueError:
        raise InvalidInputError("Invalid post ID") from None
    post = db.query(Post).filter(Post.id == canonical_id).first()
    if post is None:
        raise NotFoundError("Post not found")
    return post


def create_post(db: Session, data: PostCreate, user_id: str) -> PostWithAuthor:
    """
    Create a post owned by user_id and return it joined with its author.

    The owner must exist; a missing owner is reported as InvalidInputError
    ("User not found") rather than NotFoundError, since the path names no user.
    """
    try:
        get_user(db, user_id)
    except NotFoundError as e:
        raise InvalidInputError("User not found") from e

    post = Post(title=data.title, content=data.content, user_id=parse_id(user_id))
    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error creating post for user %s", user_id)
        raise InternalError("Error creating post") from e

    db.refresh(post)
    logger.info("Post created", extra={"post_id": post.id, "user_id": post.user_id})
    return get_post(db, post.id)


def list_posts(db: Session) -> list[PostWithAuthor]:
    """
    Return all posts with their author summary, newest first.

    The author summary is read at query time, so it always reflects the
    current user record.
    """
    rows = _with_author(db).order_by(Post.created_at.desc()).all()
    return [_to_post_with_author(post, user) for post, user in rows]


def get_post(db: Session, post_id: str) -> PostWithAuthor:
    """Return one author-joined post. Raises InvalidInputError or NotFoundError."""
    try:
        canonical_id = parse_id(post_id)
    except ValueError:
        raise InvalidInputError("Invalid post ID") from None
    try:
        row = _with_author(db).filter(Post.id == canonical_id).first()
    except SQLAlchemyError as e:
        logger.exception("Error loading post %s", post_id)
        raise InvalidInputError("Invalid post ID") from e
    if row is None:
        raise NotFoundError("Post not found")
    post, user = row
    return _to_post_with_author(post, user)


def update_post(
    db: Session, post_id: str, changes: PostUpdate, user_id: str
) -> PostWithAuthor:
    """
    Apply supplied title/content to a post owned by user_id.

    Existence is checked before ownership, so a missing post is always
    NotFoundError regardless of who asks.
    """
    try:
        post = _load_post(db, post_id)
        if post.user_id != user_id:
            raise ForbiddenError("You can only update your own posts")

        if changes.title is not None:
            post.title = changes.title
        if changes.content is not None:
            post.content = changes.content
        post.updated_at = utcnow()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error updating post %s", post_id)
        raise InvalidInputError("Error updating post") from e

    logger.info("Post updated", extra={"post_id": post.id, "user_id": user_id})
    return get_post(db, post.id)


def delete_post(db: Session, post_id: str, user_id: str) -> None:
    """Delete a post owned by user_id. A missing post always raises NotFoundError."""
    try:
        post = _load_post(db, post_id)
        if post.user_id != user_id:
            raise ForbiddenError("You can only delete your own posts")
        deleted_id = post.id
        db.delete(post)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error deleting post %s", post_id)
        raise InvalidInputError("Error deleting post") from e

    logger.info("Post deleted", extra={"post_id": deleted_id, "user_id": user_id})
