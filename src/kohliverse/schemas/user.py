"""User, leaderboard and notification schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CreatorResponse(BaseModel):
    """Leaderboard row for a creator."""

    id: str
    username: str
    total_posts: int
    total_votes_received: int

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    id: int
    type: str
    from_user_id: str
    post_id: int | None
    read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
