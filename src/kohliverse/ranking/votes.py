"""Vote state transitions.

Each (user, post) pair is in one of three states: no vote, up or down.
Clicking the current direction again retracts the vote; clicking the other
direction switches it. :func:`cast_vote` computes the transition and the
counter delta without touching any store; the caller applies both in a
single transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kohliverse.ranking.errors import InvalidDirection, InvalidVoteState, SelfVoteForbidden


class VoteDirection(str, Enum):
    """Direction of a live vote."""

    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: object) -> VoteDirection:
        """Return the direction for ``value`` or raise :class:`InvalidDirection`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidDirection(value) from exc


class VoteAction(str, Enum):
    """Mutation the vote store must perform."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class VoteDelta:
    """Signed adjustment to a post's counters."""

    upvotes: int = 0
    downvotes: int = 0

    @property
    def net(self) -> int:
        """Change in ``upvotes - downvotes``."""
        return self.upvotes - self.downvotes

    def __add__(self, other: VoteDelta) -> VoteDelta:
        return VoteDelta(self.upvotes + other.upvotes, self.downvotes + other.downvotes)

    def apply(self, upvotes: int, downvotes: int) -> tuple[int, int]:
        """Return the counters after this delta.

        Raises:
            InvalidVoteState: If either counter would become negative.
        """
        new_up = upvotes + self.upvotes
        new_down = downvotes + self.downvotes
        if new_up < 0 or new_down < 0:
            raise InvalidVoteState(
                f"Vote delta {self} would leave counters at ({new_up}, {new_down})"
            )
        return new_up, new_down


def _unit_delta(direction: VoteDirection, amount: int) -> VoteDelta:
    if direction is VoteDirection.UP:
        return VoteDelta(upvotes=amount)
    return VoteDelta(downvotes=amount)


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a vote transition."""

    user_id: str
    post_id: int
    action: VoteAction
    delta: VoteDelta
    previous_state: VoteDirection | None
    new_state: VoteDirection | None


def cast_vote(
    user_id: str,
    post_id: int,
    direction: VoteDirection | str,
    current_vote: VoteDirection | str | None,
    *,
    author_id: str | None = None,
    allow_self_vote: bool = True,
) -> VoteOutcome:
    """Compute the outcome of ``user_id`` clicking ``direction`` on a post.

    Args:
        user_id: Voter identifier, passed explicitly by the caller.
        post_id: Target post identifier.
        direction: Requested direction (``up``/``down``).
        current_vote: The voter's live vote on the post as read by the caller,
            or ``None`` when there is none.
        author_id: Author of the post; only consulted for the self-vote policy.
        allow_self_vote: Whether authors may vote on their own posts.

    Returns:
        The store mutation, counter delta and resulting vote state.

    Raises:
        InvalidDirection: If ``direction`` or ``current_vote`` is not up/down.
        SelfVoteForbidden: If the voter is the author and policy forbids it.
    """
    requested = VoteDirection.parse(direction)
    previous = VoteDirection.parse(current_vote) if current_vote is not None else None

    if not allow_self_vote and author_id is not None and author_id == user_id:
        raise SelfVoteForbidden("Authors cannot vote on their own posts")

    if previous is None:
        action = VoteAction.CREATE
        delta = _unit_delta(requested, 1)
        new_state: VoteDirection | None = requested
    elif previous is requested:
        action = VoteAction.DELETE
        delta = _unit_delta(requested, -1)
        new_state = None
    else:
        action = VoteAction.UPDATE
        delta = _unit_delta(previous, -1) + _unit_delta(requested, 1)
        new_state = requested

    return VoteOutcome(
        user_id=user_id,
        post_id=post_id,
        action=action,
        delta=delta,
        previous_state=previous,
        new_state=new_state,
    )
