"""Vote-related Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, Field


class VoteRequest(BaseModel):
    """Body of a comment vote.

    ``type`` accepts any JSON value and is validated by the endpoint, so a
    wrong direction of any type yields a 400 with the same message the
    GraphQL API uses.
    """

    type: Any = Field(None, description='"upvote" or "downvote"')
