"""Data access helpers for notifications."""
from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from kohliverse.models import Notification

__all__ = ["NotificationRepository"]


class NotificationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(
        self,
        *,
        user_id: str,
        type_: str,
        from_user_id: str,
        post_id: int | None = None,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            type=type_,
            from_user_id=from_user_id,
            post_id=post_id,
        )
        self.session.add(notification)
        self.session.flush()
        return notification

    def has_unread(
        self,
        *,
        user_id: str,
        type_: str,
        from_user_id: str,
        post_id: int | None,
    ) -> bool:
        """Return whether an identical notification is still waiting to be read."""
        stmt = (
            select(Notification.id)
            .where(
                Notification.user_id == user_id,
                Notification.type == type_,
                Notification.from_user_id == from_user_id,
                Notification.post_id == post_id,
                Notification.read.is_(False),
            )
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def list_for_user(self, user_id: str, limit: int = 50) -> list[Notification]:
        """Return the latest notifications for ``user_id``."""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(desc(Notification.created_at), desc(Notification.id))
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

    def mark_read(self, user_id: str, notification_id: int) -> Notification | None:
        """Mark a notification read; returns ``None`` if it is not the user's."""
        notification = self.session.get(Notification, notification_id)
        if notification is None or notification.user_id != user_id:
            return None
        notification.read = True
        self.session.flush()
        return notification
