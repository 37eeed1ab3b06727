"""ORM model for registered users."""

from sqlalchemy import Column, DateTime, String, func

from app.models.base import Base, new_id, utcnow


class User(Base):
    """
    Registered account; owns posts.

    username and email carry unique indexes: the service checks for duplicates
    first, the index rejects whatever slips past under concurrent registration.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )
