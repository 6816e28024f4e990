# src/inkwell/models/vote.py
"""Models capturing voting interactions on comments."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment

VOTE_UP: Final[int] = 1
VOTE_DOWN: Final[int] = -1


class Vote(Base):
    """One voter's current stance on one comment.

    Voters are identified by IP address only. A voter can flip their stance
    but never retract it.
    """

    __tablename__ = "vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_vote_value"),
        # (ip, comment_id) is the natural key: one stance per voter per comment.
        UniqueConstraint("ip", "comment_id", name="uq_vote_ip_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(45), nullable=False)
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    comment: Mapped[Comment] = relationship("Comment", back_populates="votes")
