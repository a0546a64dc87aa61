"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime

from sqlalchemy import delete, desc, select
from sqlalchemy.orm import Session

from kohliverse.models import Comment, Notification, Post, PostVote, Report
from kohliverse.ranking.scoring import ScoreModel, SortMode
from kohliverse.ranking.submission import VideoRef
from kohliverse.ranking.votes import VoteDelta

__all__ = ["PostRepository"]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session, score_model: ScoreModel | None = None) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session
        self.score_model = score_model or ScoreModel.from_settings()

    def get_by_id(self, post_id: int, *, for_update: bool = False) -> Post | None:
        """Return a post by identifier, optionally locking the row."""
        stmt = select(Post).where(Post.id == post_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def find_by_fingerprint(self, fingerprint: str) -> Post | None:
        """Return the post submitted with ``fingerprint``, if any."""
        stmt = select(Post).where(Post.url_fingerprint == fingerprint)
        return self.session.execute(stmt).scalars().first()

    def list_sorted(
        self,
        mode: SortMode | str,
        *,
        limit: int,
        offset: int = 0,
        author_id: str | None = None,
    ) -> list[Post]:
        """Return posts ordered best-first under ``mode``.

        The hot order reads the cached ``hot_score`` column, which the vote
        service and the re-rank sweep keep current.
        """
        mode = SortMode.parse(mode)
        stmt = select(Post)
        if author_id is not None:
            stmt = stmt.where(Post.author_id == author_id)

        if mode is SortMode.HOT:
            stmt = stmt.order_by(desc(Post.hot_score), desc(Post.created_at), desc(Post.id))
        elif mode is SortMode.TOP:
            stmt = stmt.order_by(
                desc(Post.upvotes - Post.downvotes),
                desc(Post.created_at),
                desc(Post.id),
            )
        else:
            stmt = stmt.order_by(desc(Post.created_at), desc(Post.id))

        stmt = stmt.limit(limit).offset(offset)
        return list(self.session.execute(stmt).scalars())

    def search(self, query: str, limit: int) -> list[Post]:
        """Return posts whose title contains ``query`` literally, newest first."""
        pattern = _escape_like(query)
        stmt = (
            select(Post)
            .where(Post.title.ilike(f"%{pattern}%", escape="\\"))
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars())

    def iter_all(self, batch_size: int = 500) -> Iterator[Post]:
        """Yield every post, loading ``batch_size`` rows at a time."""
        stmt = select(Post).order_by(Post.id).execution_options(yield_per=batch_size)
        yield from self.session.execute(stmt).scalars()

    def create(
        self,
        *,
        author_id: str,
        author_name: str,
        title: str,
        tags: list[str],
        video_url: str,
        video: VideoRef,
        url_fingerprint: str | None,
        created_at: datetime,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance.

        New posts start with no votes, so their hot score is zero.
        """
        post = Post(
            author_id=author_id,
            author_name=author_name,
            title=title,
            tags=list(tags),
            video_url=video_url,
            url_fingerprint=url_fingerprint,
            platform=video.platform.value,
            video_id=video.video_id,
            embed_url=video.embed_url,
            thumbnail_url=video.thumbnail_url,
            upvotes=0,
            downvotes=0,
            comment_count=0,
            created_at=created_at,
            hot_score=0.0,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def refresh_hot_score(self, post: Post, now: datetime) -> float:
        """Recompute and store the hot score of ``post``."""
        post.hot_score = self.score_model.hot(post.upvotes, post.downvotes, post.created_at, now)
        return post.hot_score

    def apply_vote_delta(self, post: Post, delta: VoteDelta, now: datetime) -> Post:
        """Apply a counter delta to ``post`` and recompute its hot score.

        Raises:
            InvalidVoteState: If a counter would become negative.
        """
        post.upvotes, post.downvotes = delta.apply(post.upvotes, post.downvotes)
        self.refresh_hot_score(post, now)
        self.session.flush()
        return post

    def increment_comment_count(self, post: Post) -> Post:
        post.comment_count += 1
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove ``post`` together with its votes, comments, reports and notifications."""
        for model in (PostVote, Comment, Report, Notification):
            self.session.execute(delete(model).where(model.post_id == post.id))
        self.session.delete(post)
        self.session.flush()
