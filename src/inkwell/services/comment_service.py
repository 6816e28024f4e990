"""Service-level helpers for managing comments."""
from __future__ import annotations

from sqlalchemy.orm import Session

from inkwell.core.errors import NotFoundError, PermissionDeniedError
from inkwell.models.comment import Comment
from inkwell.models.post import Post
from inkwell.models.user import User
from inkwell.repositories import CommentRepository

__all__ = [
    "create_comment",
    "delete_comment",
    "get_comment",
    "get_owned_comment",
    "list_comments",
    "update_comment",
]


def list_comments(db: Session, post_id: int | None = None) -> list[Comment]:
    """Return all comments, optionally only those of one post."""
    repo = CommentRepository(db)
    if post_id is None:
        return repo.list_all()
    return repo.list_for_post(post_id)


def get_comment(db: Session, comment_id: int) -> Comment | None:
    """Return a comment by identifier."""
    return CommentRepository(db).get_by_id(comment_id)


def get_owned_comment(db: Session, comment_id: int, user: User) -> Comment:
    """Return a comment the user is allowed to modify.

    Raises:
        NotFoundError: If the comment does not exist.
        PermissionDeniedError: If ``user`` is not the author.
    """
    comment = get_comment(db, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    if comment.author_id != user.id:
        raise PermissionDeniedError("You are not authorized to modify this comment")
    return comment


def create_comment(db: Session, author: User, *, post_id: int, content: str) -> Comment:
    """Attach a new comment to an existing post.

    Raises:
        NotFoundError: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found")
    return CommentRepository(db).create(content=content, post_id=post_id, author_id=author.id)


def update_comment(db: Session, comment: Comment, content: str) -> Comment:
    """Replace a comment's content; its score is untouched."""
    return CommentRepository(db).update_content(comment, content)


def delete_comment(db: Session, comment: Comment) -> None:
    """Delete a comment and its votes."""
    CommentRepository(db).delete(comment)
