# tests/test_subscriptions.py
"""Tests for GraphQL subscriptions driven through the schema."""

import asyncio
import inspect
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
import strawberry

from inkwell.gql import schema
from inkwell.gql.types import CommentType
from inkwell.services.events import COMMENT_ADDED, VOTE_UPDATED, EventBroker


def _comment(comment_id: int, post_id: int, score: int = 0) -> CommentType:
    return CommentType(
        id=strawberry.ID(str(comment_id)),
        content="Streamed comment",
        created_at=datetime.now(timezone.utc),
        post_id=strawberry.ID(str(post_id)),
        author_id=strawberry.ID("1"),
        score=score,
    )


async def _open(query: str, broker: EventBroker, topic: str):
    stream = schema.subscribe(query, context_value=SimpleNamespace(broker=broker))
    if inspect.isawaitable(stream):
        stream = await stream
    pending = asyncio.ensure_future(stream.__anext__())
    for _ in range(100):
        if broker.subscriber_count(topic):
            break
        await asyncio.sleep(0.01)
    return stream, pending


@pytest.mark.asyncio
async def test_vote_updated_filters_by_comment() -> None:
    broker = EventBroker()
    stream, pending = await _open(
        'subscription { voteUpdated(commentId: "2") { id score } }', broker, VOTE_UPDATED
    )

    broker.publish(VOTE_UPDATED, _comment(1, 10, score=5))
    broker.publish(VOTE_UPDATED, _comment(2, 10, score=-1))

    result = await asyncio.wait_for(pending, timeout=1)
    assert result.errors is None
    assert result.data == {"voteUpdated": {"id": "2", "score": -1}}
    await stream.aclose()


@pytest.mark.asyncio
async def test_comment_added_filters_by_post() -> None:
    broker = EventBroker()
    stream, pending = await _open(
        'subscription { commentAdded(postId: "10") { id postId } }', broker, COMMENT_ADDED
    )

    broker.publish(COMMENT_ADDED, _comment(3, 11))
    broker.publish(COMMENT_ADDED, _comment(4, 10))

    result = await asyncio.wait_for(pending, timeout=1)
    assert result.data == {"commentAdded": {"id": "4", "postId": "10"}}
    await stream.aclose()
