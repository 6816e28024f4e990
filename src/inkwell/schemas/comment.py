"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentCreate(BaseModel):
    """Schema for creating a comment.

    ``post_id`` is kept loosely typed so the endpoint can answer a malformed
    identifier with 400 rather than a validation error.
    """

    content: str = Field(..., min_length=3, max_length=500)
    post_id: int | str = Field(..., alias="postId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class CommentUpdate(BaseModel):
    """Schema for editing a comment's content."""

    content: str = Field(..., min_length=3, max_length=500)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    content: str
    created_at: datetime
    author_id: int
    post_id: int
    score: int

    model_config = ConfigDict(from_attributes=True)
