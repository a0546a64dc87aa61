"""Data access helpers for per-user votes."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from kohliverse.models import PostVote
from kohliverse.ranking.errors import InvalidVoteState
from kohliverse.ranking.votes import VoteAction, VoteDirection, VoteOutcome

__all__ = ["VoteRepository"]


class VoteRepository:
    """Vote store keyed on (user_id, post_id)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str, post_id: int) -> PostVote | None:
        """Return the live vote of ``user_id`` on ``post_id``."""
        stmt = select(PostVote).where(
            PostVote.post_id == post_id,
            PostVote.user_id == user_id,
        )
        return self.session.execute(stmt).scalars().first()

    def get_direction(self, user_id: str, post_id: int) -> VoteDirection | None:
        vote = self.get(user_id, post_id)
        if vote is None:
            return None
        return VoteDirection(vote.direction)

    def put(self, user_id: str, post_id: int, direction: VoteDirection) -> PostVote:
        """Create or update the vote row."""
        vote = self.get(user_id, post_id)
        if vote is None:
            vote = PostVote(post_id=post_id, user_id=user_id, direction=direction.value)
            self.session.add(vote)
        else:
            vote.direction = direction.value
        self.session.flush()
        return vote

    def delete(self, user_id: str, post_id: int) -> None:
        """Delete the vote row if it exists."""
        vote = self.get(user_id, post_id)
        if vote is not None:
            self.session.delete(vote)
            self.session.flush()

    def apply(self, outcome: VoteOutcome) -> None:
        """Perform the store mutation described by ``outcome``."""
        if outcome.action is VoteAction.DELETE:
            self.delete(outcome.user_id, outcome.post_id)
            return
        if outcome.new_state is None:
            raise InvalidVoteState(f"{outcome.action.value} outcome without a new vote state")
        self.put(outcome.user_id, outcome.post_id, outcome.new_state)
