"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .comment import CommentResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=5, max_length=100)
    perex: str = Field(..., min_length=10, max_length=300, description="Short summary")
    content: str = Field(..., min_length=20, max_length=1000)

    @field_validator("title", "perex", "content", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class PostUpdate(BaseModel):
    """Partial update of a post; at least one field must be supplied."""

    title: str | None = Field(None, min_length=5, max_length=100)
    perex: str | None = Field(None, min_length=10, max_length=300)
    content: str | None = Field(None, min_length=20, max_length=1000)

    @field_validator("title", "perex", "content", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def require_any_field(self) -> "PostUpdate":
        """Reject an update that would change nothing."""
        if self.title is None and self.perex is None and self.content is None:
            raise ValueError("At least one field (title, content or perex) must be provided")
        return self


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    title: str
    perex: str
    content: str
    author_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostWithComments(PostResponse):
    """Post including its comments."""

    comments: list[CommentResponse] = Field(default_factory=list)
