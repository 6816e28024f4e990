"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from inkwell.models.comment import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, comment_id: int) -> Comment | None:
        """Return a comment by identifier."""
        return self.session.get(Comment, comment_id)

    def list_all(self) -> list[Comment]:
        """Return every comment ordered by identifier."""
        return list(self.session.execute(select(Comment).order_by(Comment.id)).scalars())

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return the comments attached to a post."""
        result = self.session.execute(
            select(Comment).where(Comment.post_id == post_id).order_by(Comment.id)
        )
        return list(result.scalars())

    def create(self, *, content: str, post_id: int, author_id: int) -> Comment:
        """Insert a new comment and return the persisted ORM instance."""
        comment = Comment(content=content, post_id=post_id, author_id=author_id, score=0)
        self.session.add(comment)
        self.session.flush()
        return comment

    def update_content(self, comment: Comment, content: str) -> Comment:
        """Replace a comment's content."""
        comment.content = content
        self.session.flush()
        return comment

    def delete(self, comment: Comment) -> None:
        """Delete a comment; its votes go with it."""
        self.session.delete(comment)
        self.session.flush()

    def increment_score(self, comment_id: int, delta: int) -> Comment | None:
        """Add ``delta`` to a comment's score and return the refreshed row.

        The increment is a single ``UPDATE ... SET score = score + :delta`` so
        concurrent voters never overwrite each other's changes.
        """
        self.session.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values(score=Comment.score + delta)
            .execution_options(synchronize_session=False)
        )
        comment = self.session.get(Comment, comment_id)
        if comment is not None:
            self.session.refresh(comment)
        return comment
