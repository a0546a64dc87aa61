"""Data access helpers for comments and moderation reports."""
from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from kohliverse.models import Comment, Report

__all__ = ["CommentRepository", "ReportRepository"]


class CommentRepository:
    """Comment store keyed on post."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, post_id: int, user_id: str, username: str, content: str) -> Comment:
        comment = Comment(post_id=post_id, user_id=user_id, username=username, content=content)
        self.session.add(comment)
        self.session.flush()
        return comment

    def list_for_post(self, post_id: int, limit: int = 100) -> list[Comment]:
        """Return the comments on ``post_id``, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(desc(Comment.created_at), desc(Comment.id))
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())


class ReportRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        reporter_id: str,
        post_id: int,
        reason: str,
        description: str | None = None,
    ) -> Report:
        report = Report(
            reporter_id=reporter_id,
            post_id=post_id,
            reason=reason,
            description=description,
        )
        self.session.add(report)
        self.session.flush()
        return report

    def list_for_post(self, post_id: int) -> list[Report]:
        stmt = select(Report).where(Report.post_id == post_id).order_by(Report.id)
        return list(self.session.execute(stmt).scalars())
