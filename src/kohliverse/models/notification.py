"""Notification rows delivered to post authors."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from kohliverse.db.session import Base
from kohliverse.db.time import utcnow

NOTIFICATION_TYPE_UPVOTE = "upvote"


class Notification(Base):
    """Activity notice for a user, e.g. somebody upvoted their post."""

    __tablename__ = "notification"
    __table_args__ = (Index("ix_notification_user_id", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    from_user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=True,
    )
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
