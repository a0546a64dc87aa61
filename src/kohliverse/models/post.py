"""SQLAlchemy models for posts and related attributes."""

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kohliverse.db.session import Base
from kohliverse.db.time import utcnow


class Post(Base):
    """A submitted video link.

    Vote counters are a materialized aggregate of the live ``PostVote`` rows
    and only change through the vote service; ``comment_count`` likewise
    mirrors the comment rows and only changes through the comment service.
    ``hot_score`` is a cache of the decaying rank and is recomputed whenever
    the vote counters change.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_post_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_post_downvotes_non_negative"),
        CheckConstraint("comment_count >= 0", name="ck_post_comment_count_non_negative"),
        Index("ix_post_hot_score", "hot_score"),
        Index("ix_post_created_at", "created_at"),
        Index("ix_post_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[str] = mapped_column(String(255), nullable=False)
    author_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    # Unique constraint is the backstop for racing duplicate submissions.
    url_fingerprint: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
    )
    platform: Mapped[str] = mapped_column(String(20), nullable=False)
    video_id: Mapped[str] = mapped_column(String(64), nullable=False)
    embed_url: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(Text, nullable=False)

    upvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    downvotes: Mapped[int] = mapped_column(default=0, nullable=False)
    comment_count: Mapped[int] = mapped_column(default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    hot_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
