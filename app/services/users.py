"""User directory: registration, lookups and self-service update/delete."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, InternalError, InvalidInputError, NotFoundError
from app.core.security import hash_password
from app.models import Post, User
from app.models.base import parse_id
from app.schemas.users import UserPublic, UserUpdate

logger = logging.getLogger(__name__)


def _load_user(db: Session, user_id: str) -> User:
    try:
        canonical_id = parse_id(user_id)
    except ValueError:
        raise InvalidInputError("Invalid user ID") from None
    user = db.query(User).filter(User.id == canonical_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def _is_taken(db: Session, column, value: str, exclude_id: str | None = None) -> bool:
    query = db.query(User.id).filter(column == value)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def create_user(db: Session, username: str, email: str, password: str) -> UserPublic:
    """
    Register a user and return it without the password hash.

    Username is checked before email. The unique indexes on both columns back
    up the check when two registrations race; that case also yields ConflictError.
    """
    try:
        if _is_taken(db, User.username, username):
            raise ConflictError("Username already exists")
        if _is_taken(db, User.email, email):
            raise ConflictError("Email already exists")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("User insert rejected by unique index: username=%s", username)
        raise ConflictError("Username or email already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error creating user %s", username)
        raise InternalError("Error creating user") from e

    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return UserPublic.model_validate(user)


def list_users(db: Session) -> list[UserPublic]:
    """Return every user, oldest first, without password hashes."""
    users = db.query(User).order_by(User.created_at).all()
    return [UserPublic.model_validate(u) for u in users]


def get_user(db: Session, user_id: str) -> UserPublic:
    """Return one user. Raises InvalidInputError for malformed ids, NotFoundError if absent."""
    try:
        user = _load_user(db, user_id)
    except SQLAlchemyError as e:
        logger.exception("Error loading user %s", user_id)
        raise InvalidInputError("Invalid user ID") from e
    return UserPublic.model_validate(user)


def find_by_username(db: Session, username: str) -> User | None:
    """Full record including password hash. For authentication only; never return it to callers."""
    return db.query(User).filter(User.username == username).first()


def find_by_email(db: Session, email: str) -> User | None:
    """Full record including password hash, looked up by email."""
    return db.query(User).filter(User.email == email).first()


def update_user(db: Session, user_id: str, changes: UserUpdate) -> UserPublic:
    """
    Apply the supplied fields to a user and return the result.

    A username or email equal to the user's current value is not a conflict;
    the uniqueness scan excludes the user's own id. A new password is re-hashed.
    """
    try:
        user = _load_user(db, user_id)

        if changes.username is not None and changes.username != user.username:
            if _is_taken(db, User.username, changes.username, exclude_id=user.id):
                raise ConflictError("Username already exists")
        if changes.email is not None and changes.email != user.email:
            if _is_taken(db, User.email, changes.email, exclude_id=user.id):
                raise ConflictError("Email already exists")

        if changes.username is not None:
            user.username = changes.username
        if changes.email is not None:
            user.email = changes.email
        if changes.password is not None:
            user.password_hash = hash_password(changes.password)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("User update rejected by unique index: user_id=%s", user_id)
        raise ConflictError("Username or email already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error updating user %s", user_id)
        raise InvalidInputError("Error updating user") from e

    db.refresh(user)
    logger.info("User updated", extra={"user_id": user.id})
    return UserPublic.model_validate(user)


def delete_user(db: Session, user_id: str) -> None:
    """Delete a user together with every post they own (one transaction)."""
    try:
        user = _load_user(db, user_id)
        deleted_id = user.id
        posts_deleted = (
            db.query(Post)
            .filter(Post.user_id == user.id)
            .delete(synchronize_session=False)
        )
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error deleting user %s", user_id)
        raise InvalidInputError("Error deleting user") from e

    logger.info(
        "User deleted",
        extra={"user_id": deleted_id, "posts_deleted": posts_deleted},
    )
