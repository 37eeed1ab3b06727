"""ORM model for blog posts."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func

from app.models.base import Base, new_id, utcnow


class Post(Base):
    """
    A post owned by the user who created it.

    user_id is set once on insert and never changed; only the owner may update
    title/content or delete the post.
    """

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )
