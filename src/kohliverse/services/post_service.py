"""Service-level helpers for submitting, deleting and re-ranking posts."""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kohliverse.core.settings import settings
from kohliverse.db.time import utcnow
from kohliverse.models.post import Post
from kohliverse.ranking.errors import DuplicateSubmission
from kohliverse.ranking.scoring import ScoreModel
from kohliverse.ranking.submission import (
    Duplicate,
    FingerprintMode,
    SubmissionGuard,
    Unique,
)
from kohliverse.repositories.post_repo import PostRepository
from kohliverse.repositories.user_repo import UserRepository
from kohliverse.services.vote_service import PostNotFound

# Configure logger for this module
logger = logging.getLogger(__name__)


class PostService:
    """Create and remove posts, gating creation on the duplicate check."""

    def __init__(
        self,
        session: Session,
        *,
        score_model: ScoreModel | None = None,
        clock: Callable[[], datetime] = utcnow,
        fingerprint_mode: FingerprintMode | None = None,
    ) -> None:
        self.session = session
        self.clock = clock
        self.posts = PostRepository(session, score_model)
        self.users = UserRepository(session)
        self.guard = SubmissionGuard(
            self.posts,
            mode=fingerprint_mode or settings.fingerprint_mode,
        )

    def check_duplicate(self, url: str) -> Unique | Duplicate:
        """Return whether ``url`` was already submitted.

        Raises:
            UnrecognizedUrl: If the URL is not a supported video link.
        """
        return self.guard.check_duplicate(url)

    def submit(
        self,
        *,
        author_id: str,
        author_name: str | None,
        url: str,
        title: str,
        tags: Sequence[str] = (),
    ) -> Post:
        """Create a post for ``url`` after the duplicate check.

        Args:
            author_id: Identifier of the submitting user.
            author_name: Display name stored alongside the post.
            url: Raw video URL as entered by the user.
            title: Post title.
            tags: Optional tag names.

        Returns:
            The persisted post.

        Raises:
            UnrecognizedUrl: If the URL is not a supported video link.
            DuplicateSubmission: If the same video was already submitted,
                either found by the pre-check or by the unique constraint.
        """
        verdict = self.check_duplicate(url)
        if isinstance(verdict, Duplicate):
            raise DuplicateSubmission(verdict.existing_post_id, verdict.existing_title)

        author = self.users.get_or_create(author_id, author_name)
        try:
            post = self.posts.create(
                author_id=author_id,
                author_name=author.username,
                title=title.strip(),
                tags=[tag.strip() for tag in tags if tag.strip()],
                video_url=url.strip(),
                video=verdict.video,
                url_fingerprint=verdict.fingerprint,
                created_at=self.clock(),
            )
            self.users.add_posts(author_id, 1)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            existing = self.posts.find_by_fingerprint(verdict.fingerprint)
            if existing is None:
                raise
            logger.warning("Duplicate submission raced for post %s", existing.id)
            raise DuplicateSubmission(existing.id, existing.title) from exc

        self.session.refresh(post)
        logger.info(
            "Post %s created by %s (%s:%s)",
            post.id,
            author_id,
            post.platform,
            post.video_id,
        )
        return post

    def delete(self, *, user_id: str, post_id: int) -> None:
        """Delete a post; only its author may do so.

        Raises:
            PostNotFound: If the post does not exist.
            PermissionError: If ``user_id`` is not the author.
        """
        post = self.posts.get_by_id(post_id)
        if post is None:
            raise PostNotFound(post_id)
        if post.author_id != user_id:
            raise PermissionError("You can only delete your own posts")

        net = post.upvotes - post.downvotes
        self.posts.delete(post)
        self.users.add_posts(user_id, -1)
        self.users.add_votes_received(user_id, -net)
        self.session.commit()
        logger.info("Post %s deleted by its author", post_id)


def rerank_posts(
    session: Session,
    now: datetime | None = None,
    *,
    score_model: ScoreModel | None = None,
) -> int:
    """Recompute the hot score of every post for time-decay freshness.

    Returns:
        Number of posts re-scored.
    """
    now = now or utcnow()
    repo = PostRepository(session, score_model)
    count = 0
    for post in repo.iter_all():
        repo.refresh_hot_score(post, now)
        count += 1
    session.commit()
    logger.info("Re-ranked %d posts", count)
    return count
