"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for a vote click."""

    post_id: int
    direction: Literal["up", "down"] = Field(..., description="up or down")


class VoteResponse(BaseModel):
    """New vote state and counters after a click."""

    post_id: int
    new_state: Literal["up", "down"] | None
    upvotes: int
    downvotes: int
    hot_score: float


class MyVoteResponse(BaseModel):
    direction: Literal["up", "down"] | None
