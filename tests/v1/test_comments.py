# tests/v1/test_comments.py
"""Tests for comment and report endpoints."""

from fastapi import status


def test_create_and_list_comments(client, headers_for, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "That follow-through!"},
        headers=headers_for("fan-1", "third_man"),
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["post_id"] == test_post.id
    assert data["username"] == "third_man"
    assert data["content"] == "That follow-through!"

    listed = client.get(f"/api/v1/posts/{test_post.id}/comments")
    assert listed.status_code == status.HTTP_200_OK
    assert [c["id"] for c in listed.json()] == [data["id"]]

    post = client.get(f"/api/v1/posts/{test_post.id}").json()
    assert post["comment_count"] == 1


def test_comment_requires_identity(client, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "anonymous"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_comment_validation(client, headers_for, test_post) -> None:
    blank = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "   "},
        headers=headers_for("fan-1"),
    )
    assert blank.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    missing = client.post(
        "/api/v1/posts/99999/comments",
        json={"content": "hello"},
        headers=headers_for("fan-1"),
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND

    listing = client.get("/api/v1/posts/99999/comments")
    assert listing.status_code == status.HTTP_404_NOT_FOUND


def test_report_post(client, headers_for, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/reports",
        json={"reason": "spam", "description": "Channel promo"},
        headers=headers_for("fan-1"),
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["post_id"] == test_post.id
    assert data["reason"] == "spam"
    assert data["status"] == "pending"


def test_report_validation(client, headers_for, test_post) -> None:
    unknown = client.post(
        f"/api/v1/posts/{test_post.id}/reports",
        json={"reason": "boring"},
        headers=headers_for("fan-1"),
    )
    assert unknown.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    missing = client.post(
        "/api/v1/posts/99999/reports",
        json={"reason": "nsfw"},
        headers=headers_for("fan-1"),
    )
    assert missing.status_code == status.HTTP_404_NOT_FOUND

    anonymous = client.post(f"/api/v1/posts/{test_post.id}/reports", json={"reason": "spam"})
    assert anonymous.status_code == status.HTTP_401_UNAUTHORIZED
