"""API endpoint modules for version 1."""

from .leaderboard import router as leaderboard_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .votes import router as votes_router

__all__ = [
    "leaderboard_router",
    "notifications_router",
    "posts_router",
    "votes_router",
]
