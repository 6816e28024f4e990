# tests/v1/test_posts.py
"""Tests for post endpoints."""

from fastapi import status
from sqlalchemy import func, select

from inkwell.models import Comment, Vote
from inkwell.services.voting import get_vote_service

VALID_POST = {
    "title": "A fresh post",
    "perex": "Short summary of it.",
    "content": "Long enough body text for a post.",
}


def test_create_post(client, auth_token, test_user) -> None:
    response = client.post("/api/v1/posts/", json=VALID_POST, headers=auth_token)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["title"] == VALID_POST["title"]
    assert body["author_id"] == test_user.id


def test_create_post_validates_lengths(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={**VALID_POST, "title": "Hey"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_post_requires_auth(client) -> None:
    response = client.post("/api/v1/posts/", json=VALID_POST)
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_invalid_token_is_rejected(client) -> None:
    response = client.post(
        "/api/v1/posts/",
        json=VALID_POST,
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_posts_includes_comments(client, test_post, test_comment) -> None:
    response = client.get("/api/v1/posts/")

    assert response.status_code == status.HTTP_200_OK
    posts = response.json()
    assert len(posts) == 1
    assert [c["id"] for c in posts[0]["comments"]] == [test_comment.id]


def test_get_post(client, test_post) -> None:
    response = client.get(f"/api/v1/posts/{test_post.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["perex"] == test_post.perex


def test_get_post_invalid_and_missing(client) -> None:
    assert client.get("/api/v1/posts/xyz").status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/api/v1/posts/99999").status_code == status.HTTP_404_NOT_FOUND


def test_partial_update_keeps_other_fields(client, auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": "Renamed post"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["title"] == "Renamed post"
    assert body["content"] == test_post.content


def test_empty_update_is_rejected(client, auth_token, test_post) -> None:
    response = client.put(f"/api/v1/posts/{test_post.id}", json={}, headers=auth_token)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_non_author_cannot_update(client, other_auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": "Not my post"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_non_author_cannot_delete(client, other_auth_token, test_post) -> None:
    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_post_cascades_to_comments_and_votes(
    client, auth_token, test_post, test_comment, db_session
) -> None:
    get_vote_service(db_session).apply_vote(test_comment.id, "upvote", "1.2.3.4")
    db_session.commit()

    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_token)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.scalar(select(func.count(Comment.id))) == 0
    assert db_session.scalar(select(func.count(Vote.id))) == 0
