"""Vote casting as one atomic read-modify-write against the store."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kohliverse.core.settings import settings
from kohliverse.db.time import utcnow
from kohliverse.models.notification import NOTIFICATION_TYPE_UPVOTE
from kohliverse.ranking.errors import ConcurrencyConflict
from kohliverse.ranking.scoring import ScoreModel
from kohliverse.ranking.votes import VoteDirection, VoteOutcome, cast_vote
from kohliverse.repositories.notification_repo import NotificationRepository
from kohliverse.repositories.post_repo import PostRepository
from kohliverse.repositories.user_repo import UserRepository
from kohliverse.repositories.vote_repo import VoteRepository

# Configure logger for this module
logger = logging.getLogger(__name__)


class PostNotFound(LookupError):
    """Raised when the target post does not exist."""

    def __init__(self, post_id: int) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


@dataclass(frozen=True)
class VoteResult:
    """What the caller shows after a vote click."""

    post_id: int
    new_state: VoteDirection | None
    upvotes: int
    downvotes: int
    hot_score: float


class VoteService:
    """Apply vote transitions and counter deltas in a single transaction.

    A lost race between two first votes of the same user surfaces as an
    ``IntegrityError`` on the vote primary key; the whole unit of work is
    rolled back and replayed against fresh state.
    """

    def __init__(
        self,
        session: Session,
        *,
        score_model: ScoreModel | None = None,
        clock: Callable[[], datetime] = utcnow,
        allow_self_vote: bool | None = None,
        max_retries: int | None = None,
    ) -> None:
        self.session = session
        self.clock = clock
        self.posts = PostRepository(session, score_model)
        self.votes = VoteRepository(session)
        self.users = UserRepository(session)
        self.notifications = NotificationRepository(session)
        self.allow_self_vote = (
            settings.allow_self_vote if allow_self_vote is None else allow_self_vote
        )
        self.max_retries = settings.vote_max_retries if max_retries is None else max_retries

    def current_vote(self, user_id: str, post_id: int) -> VoteDirection | None:
        """Return the live vote of ``user_id`` on ``post_id``."""
        return self.votes.get_direction(user_id, post_id)

    def cast(self, user_id: str, post_id: int, direction: VoteDirection | str) -> VoteResult:
        """Record ``user_id`` clicking ``direction`` on ``post_id``.

        Raises:
            InvalidDirection: If the direction is not up/down.
            PostNotFound: If the post does not exist.
            SelfVoteForbidden: If self-votes are disabled and the voter is the author.
            ConcurrencyConflict: If the write kept conflicting after all retries.
        """
        requested = VoteDirection.parse(direction)
        last_error: IntegrityError | None = None

        for attempt in range(self.max_retries + 1):
            try:
                result = self._cast_once(user_id, post_id, requested)
                self.session.commit()
                return result
            except IntegrityError as exc:
                self.session.rollback()
                last_error = exc
                logger.warning(
                    "Vote conflict for user %s on post %s (attempt %d/%d)",
                    user_id,
                    post_id,
                    attempt + 1,
                    self.max_retries + 1,
                )
            except Exception:
                self.session.rollback()
                raise

        raise ConcurrencyConflict(
            f"Vote on post {post_id} conflicted with a concurrent update"
        ) from last_error

    def _cast_once(self, user_id: str, post_id: int, requested: VoteDirection) -> VoteResult:
        post = self.posts.get_by_id(post_id, for_update=True)
        if post is None:
            raise PostNotFound(post_id)

        outcome = cast_vote(
            user_id,
            post_id,
            requested,
            self.votes.get_direction(user_id, post_id),
            author_id=post.author_id,
            allow_self_vote=self.allow_self_vote,
        )
        logger.debug(
            "Vote %s by %s on post %s: %s -> %s",
            outcome.action.value,
            user_id,
            post_id,
            outcome.previous_state,
            outcome.new_state,
        )

        self.votes.apply(outcome)
        self.posts.apply_vote_delta(post, outcome.delta, self.clock())
        self.users.add_votes_received(post.author_id, outcome.delta.net)
        self._notify_author(outcome, post.author_id)

        return VoteResult(
            post_id=post.id,
            new_state=outcome.new_state,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            hot_score=post.hot_score,
        )

    def _notify_author(self, outcome: VoteOutcome, author_id: str) -> None:
        if outcome.new_state is not VoteDirection.UP or outcome.user_id == author_id:
            return
        fields = {
            "user_id": author_id,
            "type_": NOTIFICATION_TYPE_UPVOTE,
            "from_user_id": outcome.user_id,
            "post_id": outcome.post_id,
        }
        # One unread upvote notice per (fan, post), however often they re-vote.
        if self.notifications.has_unread(**fields):
            return
        self.notifications.create(**fields)
