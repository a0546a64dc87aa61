"""Data access helpers for users and the creator leaderboard."""
from __future__ import annotations

from typing import Literal

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from kohliverse.models import User

__all__ = ["UserRepository"]

LeaderboardField = Literal["posts", "votes"]


class UserRepository:
    """Thin wrapper around database access for users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def get_or_create(self, user_id: str, username: str | None = None) -> User:
        """Return the user row, creating it on first contact."""
        user = self.get(user_id)
        if user is None:
            user = User(
                id=user_id,
                username=username or user_id,
                total_posts=0,
                total_votes_received=0,
            )
            self.session.add(user)
            self.session.flush()
        elif username and user.username != username:
            user.username = username
        return user

    def add_votes_received(self, user_id: str, net: int) -> None:
        """Adjust the author's received-vote tally by ``net``."""
        if net == 0:
            return
        user = self.get_or_create(user_id)
        user.total_votes_received += net

    def add_posts(self, user_id: str, count: int) -> None:
        user = self.get_or_create(user_id)
        user.total_posts = max(0, user.total_posts + count)

    def leaderboard(self, limit: int, by: LeaderboardField = "posts") -> list[User]:
        """Return the top creators ordered by post count or votes received."""
        if by == "votes":
            order = (desc(User.total_votes_received), desc(User.total_posts))
        else:
            order = (desc(User.total_posts), desc(User.total_votes_received))
        stmt = select(User).order_by(*order, User.id).limit(limit)
        return list(self.session.execute(stmt).scalars())
