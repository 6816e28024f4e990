"""GraphQL subscriptions fed by the in-process event broker."""

from collections.abc import AsyncGenerator

import strawberry
from strawberry.types import Info

from inkwell.services.events import COMMENT_ADDED, COMMENT_DELETED, COMMENT_UPDATED, VOTE_UPDATED

from .context import GraphQLContext
from .types import CommentType


async def _stream(
    info: Info, topic: str, attribute: str, value: strawberry.ID
) -> AsyncGenerator[CommentType, None]:
    ctx: GraphQLContext = info.context
    wanted = str(value)
    async for comment in ctx.broker.subscribe(
        topic, lambda payload: str(getattr(payload, attribute)) == wanted
    ):
        yield comment


@strawberry.type
class Subscription:
    @strawberry.subscription(description="Comments added to the given post.")
    async def comment_added(
        self, info: Info, post_id: strawberry.ID
    ) -> AsyncGenerator[CommentType, None]:
        async for comment in _stream(info, COMMENT_ADDED, "post_id", post_id):
            yield comment

    @strawberry.subscription(description="Edits to the given comment.")
    async def update_comment(
        self, info: Info, comment_id: strawberry.ID
    ) -> AsyncGenerator[CommentType, None]:
        async for comment in _stream(info, COMMENT_UPDATED, "id", comment_id):
            yield comment

    @strawberry.subscription(description="Deletion of the given comment.")
    async def delete_comment(
        self, info: Info, comment_id: strawberry.ID
    ) -> AsyncGenerator[CommentType, None]:
        async for comment in _stream(info, COMMENT_DELETED, "id", comment_id):
            yield comment

    @strawberry.subscription(description="Score changes of the given comment after a vote flip.")
    async def vote_updated(
        self, info: Info, comment_id: strawberry.ID
    ) -> AsyncGenerator[CommentType, None]:
        async for comment in _stream(info, VOTE_UPDATED, "id", comment_id):
            yield comment
