# src/kohliverse/api/v1/endpoints/leaderboard.py
"""Leaderboard endpoints: top posts and top creators."""

from typing import Literal

from fastapi import APIRouter, Query

from kohliverse.api.v1.dependencies import SessionDep
from kohliverse.core.settings import settings
from kohliverse.ranking.scoring import SortMode
from kohliverse.repositories.post_repo import PostRepository
from kohliverse.repositories.user_repo import UserRepository
from kohliverse.schemas.post import PostResponse
from kohliverse.schemas.user import CreatorResponse

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/posts", response_model=list[PostResponse])
async def top_posts(
    db: SessionDep,
    limit: int = Query(settings.leaderboard_limit, ge=1, le=settings.feed_max_limit),
) -> list[PostResponse]:
    """Return the highest net-scored posts of all time."""
    posts = PostRepository(db).list_sorted(SortMode.TOP, limit=limit)
    return [PostResponse.model_validate(post) for post in posts]


@router.get("/creators", response_model=list[CreatorResponse])
async def top_creators(
    db: SessionDep,
    limit: int = Query(settings.leaderboard_limit, ge=1, le=settings.feed_max_limit),
    by: Literal["posts", "votes"] = Query("posts"),
) -> list[CreatorResponse]:
    """Return the most prolific or best-received creators."""
    users = UserRepository(db).leaderboard(limit, by=by)
    return [CreatorResponse.model_validate(user) for user in users]
