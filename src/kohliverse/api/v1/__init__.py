"""Version 1 API endpoints."""

from .endpoints import (
    leaderboard_router,
    notifications_router,
    posts_router,
    votes_router,
)

__all__ = [
    "posts_router",
    "votes_router",
    "leaderboard_router",
    "notifications_router",
]
