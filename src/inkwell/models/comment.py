# src/inkwell/models/comment.py
"""SQLAlchemy model for comments attached to posts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow

if TYPE_CHECKING:
    from .post import Post
    from .user import User
    from .vote import Vote


class Comment(Base):
    """Comment on a post, carrying a cached net vote score."""

    __tablename__ = "comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Sum of vote.value for this comment. Only ever changed by a SQL-side increment.
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped[User] = relationship("User", back_populates="comments")
    post: Mapped[Post] = relationship("Post", back_populates="comments")
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="comment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
