"""Shared test helpers: in-memory SQLite sessions and record factories."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base
from app.schemas.posts import PostCreate, PostWithAuthor
from app.schemas.users import UserPublic
from app.services.posts import create_post
from app.services.users import create_user


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with all tables; one connection shared by every session."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_user(
    db: Session,
    username: str = "alice",
    email: str | None = None,
    password: str = "secret1",
) -> UserPublic:
    """Register a user through the service (hashing and uniqueness included)."""
    return create_user(db, username, email or f"{username}@example.com", password)


def make_post(
    db: Session,
    user_id: str,
    title: str = "Hello World",
    content: str = "This is a test post",
) -> PostWithAuthor:
    """Create a post owned by user_id through the service."""
    return create_post(db, PostCreate(title=title, content=content), user_id)
