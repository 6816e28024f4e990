# tests/test_graphql.py
"""Tests for the GraphQL API served at /graphql."""

from __future__ import annotations

from typing import Any

import pytest

from tests.conftest import auth_headers_for
from inkwell.services.events import COMMENT_ADDED, COMMENT_DELETED, COMMENT_UPDATED, VOTE_UPDATED
from inkwell.services.events import get_event_broker

VOTE_MUTATION = """
mutation Vote($commentId: ID!, $type: String!) {
  voteComment(commentId: $commentId, type: $type) { id score }
}
"""


class RecordingBroker:
    """Broker double capturing every publish."""

    def __init__(self) -> None:
        self.published: list[tuple[str, Any]] = []

    def publish(self, topic: str, payload: Any) -> int:
        self.published.append((topic, payload))
        return 0

    def topics(self) -> list[str]:
        return [topic for topic, _ in self.published]


@pytest.fixture()
def broker(app):
    recording = RecordingBroker()
    app.dependency_overrides[get_event_broker] = lambda: recording
    try:
        yield recording
    finally:
        app.dependency_overrides.pop(get_event_broker, None)


def gql(client, query: str, variables: dict | None = None, headers: dict | None = None) -> dict:
    response = client.post(
        "/graphql",
        json={"query": query, "variables": variables or {}},
        headers=headers or {},
    )
    assert response.status_code == 200
    return response.json()


def error_code(result: dict) -> str:
    return result["errors"][0]["extensions"]["code"]


def test_vote_comment_first_vote_does_not_publish(client, test_comment, broker) -> None:
    result = gql(client, VOTE_MUTATION, {"commentId": str(test_comment.id), "type": "upvote"})

    assert "errors" not in result
    assert result["data"]["voteComment"]["score"] == 1
    assert broker.topics() == []


def test_vote_comment_flip_publishes_vote_updated(client, test_comment, broker) -> None:
    variables = {"commentId": str(test_comment.id), "type": "upvote"}
    gql(client, VOTE_MUTATION, variables)

    result = gql(client, VOTE_MUTATION, {**variables, "type": "downvote"})

    assert result["data"]["voteComment"]["score"] == -1
    assert broker.topics() == [VOTE_UPDATED]
    _, payload = broker.published[0]
    assert payload.score == -1
    assert str(payload.id) == str(test_comment.id)


def test_vote_comment_repeat_is_already_voted(client, test_comment, broker) -> None:
    variables = {"commentId": str(test_comment.id), "type": "upvote"}
    gql(client, VOTE_MUTATION, variables)

    result = gql(client, VOTE_MUTATION, variables)

    assert error_code(result) == "ALREADY_VOTED"
    assert result["errors"][0]["message"] == "You have already voted this way."


def test_vote_comment_invalid_type(client, test_comment, broker) -> None:
    result = gql(client, VOTE_MUTATION, {"commentId": str(test_comment.id), "type": "meh"})

    assert error_code(result) == "BAD_USER_INPUT"
    assert result["errors"][0]["message"] == 'Invalid vote type. Must be "upvote" or "downvote".'


def test_vote_comment_invalid_id(client, broker) -> None:
    result = gql(client, VOTE_MUTATION, {"commentId": "abc", "type": "upvote"})

    assert error_code(result) == "BAD_USER_INPUT"
    assert result["errors"][0]["message"] == "Invalid comment ID."


def test_vote_comment_missing_arguments(client, broker) -> None:
    result = gql(client, VOTE_MUTATION, {"commentId": "", "type": ""})

    assert error_code(result) == "BAD_USER_INPUT"
    assert result["errors"][0]["message"] == "Comment ID and type are required."


def test_vote_comment_not_found(client, broker) -> None:
    result = gql(client, VOTE_MUTATION, {"commentId": "99999", "type": "upvote"})

    assert error_code(result) == "NOT_FOUND"


def test_empty_posts_query_is_not_found(client) -> None:
    result = gql(client, "{ posts { id } }")

    assert error_code(result) == "NOT_FOUND"


def test_posts_query_resolves_nested_fields(client, test_post, test_comment) -> None:
    result = gql(
        client,
        "{ posts { id title author { username } comments { id score author { username } } } }",
    )

    post = result["data"]["posts"][0]
    assert post["title"] == test_post.title
    assert post["author"]["username"] == "alice"
    assert post["comments"] == [{"id": str(test_comment.id), "score": 0, "author": {"username": "bob"}}]


def test_single_lookups(client, test_user, test_post, test_comment) -> None:
    result = gql(
        client,
        """
        query Lookups($postId: ID!, $commentId: ID!, $userId: ID!) {
          post(id: $postId) { title }
          comment(id: $commentId) { content post { id } }
          user(id: $userId) { username posts { id } }
        }
        """,
        {"postId": str(test_post.id), "commentId": str(test_comment.id), "userId": str(test_user.id)},
    )

    data = result["data"]
    assert data["post"]["title"] == test_post.title
    assert data["comment"]["post"]["id"] == str(test_post.id)
    assert data["user"]["posts"] == [{"id": str(test_post.id)}]


def test_create_user_and_login(client) -> None:
    created = gql(
        client,
        'mutation { createUser(username: "dora", password: "hunter22") { id username } }',
    )
    assert created["data"]["createUser"]["username"] == "dora"

    login = gql(
        client,
        'mutation { loginUser(username: "dora", password: "hunter22") { token user { username } } }',
    )
    assert login["data"]["loginUser"]["user"]["username"] == "dora"
    assert login["data"]["loginUser"]["token"]


def test_login_with_bad_password(client, test_user) -> None:
    result = gql(
        client,
        'mutation { loginUser(username: "alice", password: "nope-nope") { token } }',
    )
    assert error_code(result) == "BAD_USER_INPUT"


def test_create_user_validation_error(client) -> None:
    result = gql(client, 'mutation { createUser(username: "x", password: "hunter22") { id } }')
    assert error_code(result) == "BAD_USER_INPUT"


def test_create_post_requires_login(client) -> None:
    result = gql(
        client,
        'mutation { createPost(title: "Titled", perex: "Summary text", '
        'content: "Long enough body for a post.") { id } }',
    )
    assert error_code(result) == "UNAUTHENTICATED"


def test_post_lifecycle(client, test_user, other_user) -> None:
    headers = auth_headers_for(test_user)
    created = gql(
        client,
        'mutation { createPost(title: "Titled", perex: "Summary text", '
        'content: "Long enough body for a post.") { id authorId } }',
        headers=headers,
    )
    post_id = created["data"]["createPost"]["id"]
    assert created["data"]["createPost"]["authorId"] == str(test_user.id)

    update = """
    mutation Update($postId: ID!) {
      updatePost(postId: $postId, data: {title: "Retitled"}) { title perex }
    }
    """
    forbidden = gql(client, update, {"postId": post_id}, headers=auth_headers_for(other_user))
    assert error_code(forbidden) == "FORBIDDEN"

    updated = gql(client, update, {"postId": post_id}, headers=headers)
    assert updated["data"]["updatePost"] == {"title": "Retitled", "perex": "Summary text"}

    deleted = gql(
        client,
        "mutation Delete($postId: ID!) { deletePost(postId: $postId) { id } }",
        {"postId": post_id},
        headers=headers,
    )
    assert deleted["data"]["deletePost"]["id"] == post_id
    assert error_code(gql(client, "{ posts { id } }")) == "NOT_FOUND"


def test_comment_mutations_publish_events(client, test_post, test_user, broker) -> None:
    headers = auth_headers_for(test_user)
    created = gql(
        client,
        "mutation Add($postId: ID!) { createComment(postId: $postId, content: \"First!\") { id } }",
        {"postId": str(test_post.id)},
        headers=headers,
    )
    comment_id = created["data"]["createComment"]["id"]

    gql(
        client,
        "mutation Edit($id: ID!) { updateComment(commentId: $id, content: \"Edited\") { id } }",
        {"id": comment_id},
        headers=headers,
    )
    gql(
        client,
        "mutation Drop($id: ID!) { deleteComment(commentId: $id) { id } }",
        {"id": comment_id},
        headers=headers,
    )

    assert broker.topics() == [COMMENT_ADDED, COMMENT_UPDATED, COMMENT_DELETED]
    assert all(str(payload.id) == comment_id for _, payload in broker.published)


def test_invalid_token_is_treated_as_anonymous(client, test_post) -> None:
    result = gql(
        client,
        "mutation Add($postId: ID!) { createComment(postId: $postId, content: \"Hello\") { id } }",
        {"postId": str(test_post.id)},
        headers={"Authorization": "Bearer broken"},
    )
    assert error_code(result) == "UNAUTHENTICATED"

