"""SQLAlchemy model for community members."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from kohliverse.db.time import utcnow
from kohliverse.db.session import Base


class User(Base):
    """A member known by an externally issued identifier.

    Rows are created on first contact; identity itself is owned by the
    upstream identity provider.
    """

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    total_posts: Mapped[int] = mapped_column(default=0, nullable=False)
    # Net score (upvotes minus downvotes) received across the user's posts.
    total_votes_received: Mapped[int] = mapped_column(default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
