# tests/v1/test_notifications.py
"""Tests for notification endpoints."""

from fastapi import status


def test_upvote_notifies_author(client, headers_for, author, test_post) -> None:
    client.post(
        "/api/v1/votes/",
        json={"post_id": test_post.id, "direction": "up"},
        headers=headers_for("fan-1"),
    )
    client.post(
        "/api/v1/votes/",
        json={"post_id": test_post.id, "direction": "down"},
        headers=headers_for("fan-2"),
    )

    response = client.get("/api/v1/notifications/", headers=headers_for(author.id))
    assert response.status_code == status.HTTP_200_OK
    notes = response.json()
    assert len(notes) == 1
    assert notes[0]["type"] == "upvote"
    assert notes[0]["from_user_id"] == "fan-1"
    assert notes[0]["post_id"] == test_post.id
    assert notes[0]["read"] is False


def test_mark_read(client, headers_for, author, test_post) -> None:
    client.post(
        "/api/v1/votes/",
        json={"post_id": test_post.id, "direction": "up"},
        headers=headers_for("fan-1"),
    )
    note_id = client.get("/api/v1/notifications/", headers=headers_for(author.id)).json()[0]["id"]

    other = client.post(f"/api/v1/notifications/{note_id}/read", headers=headers_for("fan-1"))
    assert other.status_code == status.HTTP_404_NOT_FOUND

    response = client.post(f"/api/v1/notifications/{note_id}/read", headers=headers_for(author.id))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["read"] is True


def test_notifications_require_identity(client) -> None:
    response = client.get("/api/v1/notifications/")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
