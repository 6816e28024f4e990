"""Service-level helpers for managing posts."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from inkwell.core.errors import NotFoundError, PermissionDeniedError
from inkwell.models.post import Post
from inkwell.models.user import User

__all__ = [
    "create_post",
    "delete_post",
    "get_owned_post",
    "get_post",
    "list_posts",
    "update_post",
]


def list_posts(db: Session) -> Sequence[Post]:
    """Return every post with its comments loaded."""
    return db.execute(
        select(Post).options(selectinload(Post.comments)).order_by(Post.id)
    ).scalars().all()


def get_post(db: Session, post_id: int) -> Post | None:
    """Return a post by identifier with its comments loaded."""
    return db.execute(
        select(Post).options(selectinload(Post.comments)).where(Post.id == post_id)
    ).scalar_one_or_none()


def get_owned_post(db: Session, post_id: int, user: User) -> Post:
    """Return a post the user is allowed to modify.

    Raises:
        NotFoundError: If the post does not exist.
        PermissionDeniedError: If ``user`` is not the author.
    """
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if post.author_id != user.id:
        raise PermissionDeniedError("You are not authorized to modify this post")
    return post


def create_post(db: Session, author: User, *, title: str, perex: str, content: str) -> Post:
    """Persist a new post authored by ``author``."""
    post = Post(title=title, perex=perex, content=content, author_id=author.id)
    db.add(post)
    db.flush()
    return post


def update_post(
    db: Session,
    post: Post,
    *,
    title: str | None = None,
    perex: str | None = None,
    content: str | None = None,
) -> Post:
    """Apply a partial update; fields left as None keep their current value."""
    if title:
        post.title = title
    if perex:
        post.perex = perex
    if content:
        post.content = content
    db.flush()
    return post


def delete_post(db: Session, post: Post) -> None:
    """Delete a post together with its comments and their votes."""
    db.delete(post)
    db.flush()
