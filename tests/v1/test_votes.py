# tests/v1/test_votes.py
"""Tests for vote-related endpoints."""

from fastapi import status

from kohliverse.core.settings import settings


def _vote(client, headers, post_id: int, direction: str):
    return client.post(
        "/api/v1/votes/",
        json={"post_id": post_id, "direction": direction},
        headers=headers,
    )


def test_cast_upvote(client, headers_for, test_post) -> None:
    response = _vote(client, headers_for("fan-1"), test_post.id, "up")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["post_id"] == test_post.id
    assert data["new_state"] == "up"
    assert (data["upvotes"], data["downvotes"]) == (1, 0)
    assert data["hot_score"] > 0


def test_click_sequence_up_up_down(client, headers_for, test_post) -> None:
    """Repeating a direction retracts; the other direction switches."""
    headers = headers_for("fan-1")

    first = _vote(client, headers, test_post.id, "up").json()
    assert (first["new_state"], first["upvotes"], first["downvotes"]) == ("up", 1, 0)

    second = _vote(client, headers, test_post.id, "up").json()
    assert (second["new_state"], second["upvotes"], second["downvotes"]) == (None, 0, 0)

    third = _vote(client, headers, test_post.id, "down").json()
    assert (third["new_state"], third["upvotes"], third["downvotes"]) == ("down", 0, 1)

    mine = client.get(f"/api/v1/votes/{test_post.id}/my-vote", headers=headers)
    assert mine.status_code == status.HTTP_200_OK
    assert mine.json() == {"direction": "down"}


def test_switch_moves_one_vote(client, headers_for, test_post) -> None:
    _vote(client, headers_for("fan-1"), test_post.id, "up")
    _vote(client, headers_for("fan-2"), test_post.id, "up")
    data = _vote(client, headers_for("fan-1"), test_post.id, "down").json()
    assert (data["upvotes"], data["downvotes"]) == (1, 1)


def test_vote_invalid_direction(client, headers_for, test_post) -> None:
    response = _vote(client, headers_for("fan-1"), test_post.id, "sideways")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_nonexistent_post(client, headers_for) -> None:
    response = _vote(client, headers_for("fan-1"), 99999, "up")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_vote_requires_identity(client, test_post) -> None:
    response = client.post("/api/v1/votes/", json={"post_id": test_post.id, "direction": "up"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_self_vote_policy(client, headers_for, author, test_post, monkeypatch) -> None:
    allowed = _vote(client, headers_for(author.id), test_post.id, "up")
    assert allowed.status_code == status.HTTP_200_OK

    monkeypatch.setattr(settings, "allow_self_vote", False)
    forbidden = _vote(client, headers_for(author.id), test_post.id, "up")
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN


def test_my_vote_without_vote(client, headers_for, test_post) -> None:
    response = client.get(f"/api/v1/votes/{test_post.id}/my-vote", headers=headers_for("lurker"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"direction": None}
