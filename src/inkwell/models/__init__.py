# src/inkwell/models/__init__.py
"""SQLAlchemy models for the Inkwell application."""

from .comment import Comment
from .post import Post
from .user import User
from .vote import VOTE_DOWN, VOTE_UP, Vote

__all__ = [
    "Comment",
    "Post",
    "User",
    "Vote", "VOTE_UP", "VOTE_DOWN",
]
