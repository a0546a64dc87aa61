"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class PostCreate(BaseModel):
    """Schema for submitting a new video link."""

    url: str = Field(..., min_length=1, max_length=2048, description="YouTube or Instagram URL")
    title: str = Field(..., min_length=1, max_length=255)
    tags: list[str] = Field(default_factory=list, max_length=10)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title must not be blank")
        return value


class DuplicateCheckRequest(BaseModel):
    """Schema for a pre-submission duplicate check."""

    url: str = Field(..., min_length=1, max_length=2048)


class DuplicateCheckResponse(BaseModel):
    """Duplicate verdict plus the detected video."""

    is_duplicate: bool
    platform: str
    video_id: str
    existing_post_id: int | None = None
    existing_title: str | None = None


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    author_id: str
    author_name: str
    title: str
    tags: list[str]
    video_url: str
    platform: str
    video_id: str
    embed_url: str
    thumbnail_url: str
    upvotes: int
    downvotes: int
    comment_count: int
    created_at: datetime
    hot_score: float
    user_vote: Literal["up", "down"] | None = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes
