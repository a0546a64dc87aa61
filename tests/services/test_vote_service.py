# tests/services/test_vote_service.py
"""Tests for the transactional vote service."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from kohliverse.models import Notification, PostVote, User
from kohliverse.ranking.errors import (
    ConcurrencyConflict,
    InvalidDirection,
    InvalidVoteState,
    SelfVoteForbidden,
)
from kohliverse.ranking.votes import VoteAction, VoteDelta, VoteDirection, VoteOutcome
from kohliverse.repositories.vote_repo import VoteRepository
from kohliverse.services.vote_service import PostNotFound, VoteService


def _notifications(db_session, user_id: str) -> list[Notification]:
    stmt = select(Notification).where(Notification.user_id == user_id)
    return list(db_session.execute(stmt).scalars())


def test_documented_click_sequence(db_session, clock, test_post) -> None:
    """up, up again, then down leaves one downvote and a negative hot score."""
    service = VoteService(db_session, clock=clock)

    result = service.cast("fan-1", test_post.id, "up")
    assert result.new_state is VoteDirection.UP
    assert (result.upvotes, result.downvotes) == (1, 0)
    assert result.hot_score == pytest.approx(1 / 3**1.5)

    result = service.cast("fan-1", test_post.id, "up")
    assert result.new_state is None
    assert (result.upvotes, result.downvotes) == (0, 0)
    assert result.hot_score == 0.0
    assert service.current_vote("fan-1", test_post.id) is None

    result = service.cast("fan-1", test_post.id, VoteDirection.DOWN)
    assert result.new_state is VoteDirection.DOWN
    assert (result.upvotes, result.downvotes) == (0, 1)
    assert result.hot_score < 0
    assert service.current_vote("fan-1", test_post.id) is VoteDirection.DOWN

    db_session.refresh(test_post)
    assert (test_post.upvotes, test_post.downvotes) == (0, 1)


def test_counters_track_many_voters(db_session, clock, test_post) -> None:
    service = VoteService(db_session, clock=clock)
    for voter in ("a", "b", "c"):
        service.cast(voter, test_post.id, "up")
    service.cast("d", test_post.id, "down")
    result = service.cast("a", test_post.id, "down")

    assert (result.upvotes, result.downvotes) == (2, 2)
    rows = db_session.execute(
        select(PostVote).where(PostVote.post_id == test_post.id)
    ).scalars().all()
    assert sorted((row.user_id, row.direction) for row in rows) == [
        ("a", "down"),
        ("b", "up"),
        ("c", "up"),
        ("d", "down"),
    ]


def test_author_receives_net_votes_and_upvote_notifications(
    db_session, clock, author, test_post
) -> None:
    service = VoteService(db_session, clock=clock)

    service.cast("fan-1", test_post.id, "up")
    service.cast("fan-2", test_post.id, "up")
    service.cast("fan-3", test_post.id, "down")

    db_session.refresh(author)
    assert author.total_votes_received == 1

    notes = _notifications(db_session, author.id)
    assert sorted(n.from_user_id for n in notes) == ["fan-1", "fan-2"]
    assert all(n.post_id == test_post.id and not n.read for n in notes)


def test_self_upvote_does_not_notify(db_session, clock, author, test_post) -> None:
    service = VoteService(db_session, clock=clock, allow_self_vote=True)
    result = service.cast(author.id, test_post.id, "up")

    assert result.upvotes == 1
    assert _notifications(db_session, author.id) == []


def test_self_vote_forbidden_leaves_state_untouched(db_session, clock, author, test_post) -> None:
    service = VoteService(db_session, clock=clock, allow_self_vote=False)

    with pytest.raises(SelfVoteForbidden):
        service.cast(author.id, test_post.id, "up")

    db_session.refresh(test_post)
    assert (test_post.upvotes, test_post.downvotes) == (0, 0)
    assert service.current_vote(author.id, test_post.id) is None


def test_missing_post(db_session, clock) -> None:
    with pytest.raises(PostNotFound) as excinfo:
        VoteService(db_session, clock=clock).cast("fan-1", 424242, "up")
    assert excinfo.value.post_id == 424242


def test_invalid_direction_is_rejected_before_any_write(db_session, clock, test_post) -> None:
    with pytest.raises(InvalidDirection):
        VoteService(db_session, clock=clock).cast("fan-1", test_post.id, "sideways")


def test_integrity_conflict_is_retried(db_session, clock, test_post, mocker) -> None:
    """A lost race is rolled back and replayed against fresh state."""
    service = VoteService(db_session, clock=clock, max_retries=2)
    real_cast_once = service._cast_once
    calls = {"n": 0}

    def flaky(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            raise IntegrityError("INSERT INTO post_vote", {}, Exception("UNIQUE constraint failed"))
        return real_cast_once(*args, **kwargs)

    mocker.patch.object(service, "_cast_once", side_effect=flaky)

    result = service.cast("fan-1", test_post.id, "up")

    assert calls["n"] == 2
    assert result.upvotes == 1


def test_persistent_conflict_raises(db_session, clock, test_post, mocker) -> None:
    service = VoteService(db_session, clock=clock, max_retries=2)
    patched = mocker.patch.object(
        service,
        "_cast_once",
        side_effect=IntegrityError("INSERT INTO post_vote", {}, Exception("locked")),
    )

    with pytest.raises(ConcurrencyConflict):
        service.cast("fan-1", test_post.id, "up")

    assert patched.call_count == 3
    db_session.refresh(test_post)
    assert test_post.upvotes == 0


def test_votes_on_unknown_author_create_user_row(db_session, clock, make_post) -> None:
    """Authors seen for the first time get a user row for their tallies."""
    post = make_post(author_id="ghost-author")
    VoteService(db_session, clock=clock).cast("fan-1", post.id, "up")

    ghost = db_session.get(User, "ghost-author")
    assert ghost is not None
    assert ghost.total_votes_received == 1


def test_repeat_upvotes_notify_once(db_session, clock, author, test_post) -> None:
    """Toggling an upvote on and off does not spam the author."""
    service = VoteService(db_session, clock=clock)
    for _ in range(5):
        service.cast("fan-1", test_post.id, "up")

    notes = _notifications(db_session, author.id)
    assert len(notes) == 1

    notes[0].read = True
    db_session.commit()
    service.cast("fan-1", test_post.id, "up")
    service.cast("fan-1", test_post.id, "up")

    notes = _notifications(db_session, author.id)
    assert len(notes) == 2
    assert sorted(n.read for n in notes) == [False, True]


def test_write_outcome_without_direction_is_rejected(db_session, test_post) -> None:
    outcome = VoteOutcome(
        user_id="fan-1",
        post_id=test_post.id,
        action=VoteAction.CREATE,
        delta=VoteDelta(upvotes=1),
        previous_state=None,
        new_state=None,
    )

    with pytest.raises(InvalidVoteState):
        VoteRepository(db_session).apply(outcome)
    assert VoteRepository(db_session).get("fan-1", test_post.id) is None
