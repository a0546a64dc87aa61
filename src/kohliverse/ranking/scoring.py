"""Ranking functions for the hot, new and top feeds."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol, TypeVar

DEFAULT_GRAVITY = 1.5
DEFAULT_HOUR_OFFSET = 2.0
_SECONDS_PER_HOUR = 3600.0


class InvalidSortMode(ValueError):
    """Raised for a sort mode name other than hot, new or top."""


class SortMode(str, Enum):
    """Named feed orderings."""

    HOT = "hot"
    NEW = "new"
    TOP = "top"

    @classmethod
    def parse(cls, value: object) -> SortMode:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidSortMode(f"Unknown sort mode: {value!r}") from exc


class Rankable(Protocol):
    """Anything carrying the fields the orderings read."""

    id: int
    upvotes: int
    downvotes: int
    created_at: datetime


R = TypeVar("R", bound=Rankable)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
    columns; those are stored as UTC, so naive values are tagged as such.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def age_hours(created_at: datetime, now: datetime) -> float:
    """Return the post age in hours, clamped to zero for future timestamps."""
    seconds = (as_utc(now) - as_utc(created_at)).total_seconds()
    return max(0.0, seconds / _SECONDS_PER_HOUR)


def hot(
    upvotes: int,
    downvotes: int,
    created_at: datetime,
    now: datetime,
    *,
    gravity: float = DEFAULT_GRAVITY,
    hour_offset: float = DEFAULT_HOUR_OFFSET,
) -> float:
    """Return the time-decayed hot score ``net / (age_hours + offset) ** gravity``.

    The base is at least ``hour_offset`` so the result is always finite.
    """
    return (upvotes - downvotes) / (age_hours(created_at, now) + hour_offset) ** gravity


def top(upvotes: int, downvotes: int) -> int:
    """Return the net score used by the top feed."""
    return upvotes - downvotes


def new(created_at: datetime) -> float:
    """Return the recency key used by the new feed (a UTC timestamp)."""
    return as_utc(created_at).timestamp()


@dataclass(frozen=True)
class ScoreModel:
    """Hot-score tunables bundled with the three orderings.

    Every sort key is descending-ready: sort with ``reverse=True``. Ties in
    hot and top fall back to newest first, then to the highest id.
    """

    gravity: float = DEFAULT_GRAVITY
    hour_offset: float = DEFAULT_HOUR_OFFSET

    @classmethod
    def from_settings(cls) -> ScoreModel:
        from kohliverse.core.settings import settings

        return cls(gravity=settings.hot_gravity, hour_offset=settings.hot_hour_offset)

    def hot(self, upvotes: int, downvotes: int, created_at: datetime, now: datetime) -> float:
        return hot(
            upvotes,
            downvotes,
            created_at,
            now,
            gravity=self.gravity,
            hour_offset=self.hour_offset,
        )

    def sort_key(
        self,
        mode: SortMode | str,
        post: Rankable,
        now: datetime,
    ) -> tuple[float, float, int]:
        """Return the tuple that orders ``post`` under ``mode``."""
        mode = SortMode.parse(mode)
        created = new(post.created_at)
        if mode is SortMode.HOT:
            primary = self.hot(post.upvotes, post.downvotes, post.created_at, now)
            return (primary, created, post.id)
        if mode is SortMode.TOP:
            return (float(top(post.upvotes, post.downvotes)), created, post.id)
        return (created, 0.0, post.id)

    def sort_posts(self, posts: Iterable[R], mode: SortMode | str, now: datetime) -> list[R]:
        """Return ``posts`` ordered best-first under ``mode``."""
        mode = SortMode.parse(mode)
        return sorted(posts, key=lambda post: self.sort_key(mode, post, now), reverse=True)


_default_model = ScoreModel()


def sort_key(mode: SortMode | str, post: Rankable, now: datetime) -> tuple[float, float, int]:
    """Sort key under the default tunables."""
    return _default_model.sort_key(mode, post, now)


def sort_posts(posts: Iterable[R], mode: SortMode | str, now: datetime) -> list[R]:
    """Order ``posts`` best-first under the default tunables."""
    return _default_model.sort_posts(posts, mode, now)
