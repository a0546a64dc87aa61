"""Comments and moderation reports on posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from kohliverse.models import Comment, Report
from kohliverse.models.comment import REPORT_REASONS
from kohliverse.repositories.comment_repo import CommentRepository, ReportRepository
from kohliverse.repositories.post_repo import PostRepository
from kohliverse.repositories.user_repo import UserRepository
from kohliverse.services.vote_service import PostNotFound

# Configure logger for this module
logger = logging.getLogger(__name__)


class CommentService:
    """Add comments while keeping ``Post.comment_count`` in step with the rows."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.users = UserRepository(session)
        self.comments = CommentRepository(session)

    def add(
        self,
        *,
        post_id: int,
        user_id: str,
        username: str | None,
        content: str,
    ) -> Comment:
        """Store a comment and bump the post's counter in one transaction.

        Raises:
            ValueError: If the comment is blank.
            PostNotFound: If the post does not exist.
        """
        text = content.strip()
        if not text:
            raise ValueError("Comment must not be empty")

        try:
            post = self.posts.get_by_id(post_id, for_update=True)
            if post is None:
                raise PostNotFound(post_id)
            author = self.users.get_or_create(user_id, username)
            comment = self.comments.create(
                post_id=post_id,
                user_id=user_id,
                username=author.username,
                content=text,
            )
            self.posts.increment_comment_count(post)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Comment %s added to post %s by %s", comment.id, post_id, user_id)
        return comment

    def list_for_post(self, post_id: int, limit: int = 100) -> list[Comment]:
        """Return the post's comments, newest first.

        Raises:
            PostNotFound: If the post does not exist.
        """
        if self.posts.get_by_id(post_id) is None:
            raise PostNotFound(post_id)
        return self.comments.list_for_post(post_id, limit)


class ReportService:
    """File moderation reports; reviewing them is left to moderators."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.reports = ReportRepository(session)

    def file(
        self,
        *,
        reporter_id: str,
        post_id: int,
        reason: str,
        description: str | None = None,
    ) -> Report:
        """Record a pending report against a post.

        Raises:
            ValueError: If ``reason`` is not a known report reason.
            PostNotFound: If the post does not exist.
        """
        if reason not in REPORT_REASONS:
            raise ValueError(f"Unknown report reason: {reason!r}")
        if self.posts.get_by_id(post_id) is None:
            raise PostNotFound(post_id)

        note = (description or "").strip() or None
        try:
            report = self.reports.create(
                reporter_id=reporter_id,
                post_id=post_id,
                reason=reason,
                description=note,
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.warning("Post %s reported by %s for %s", post_id, reporter_id, reason)
        return report
