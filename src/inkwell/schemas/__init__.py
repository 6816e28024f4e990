# src/inkwell/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, CommentUpdate
from .post import PostCreate, PostResponse, PostUpdate, PostWithComments
from .user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserSummary
from .vote import VoteRequest

__all__ = [
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "PostCreate", "PostResponse", "PostUpdate", "PostWithComments",
    "LoginRequest", "LoginResponse", "RegisterRequest", "RegisterResponse", "UserSummary",
    "VoteRequest",
]
