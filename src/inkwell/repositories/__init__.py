"""Data access wrappers around the SQLAlchemy session."""

from .comment_repo import CommentRepository
from .vote_repo import VoteLedger

__all__ = ["CommentRepository", "VoteLedger"]
