"""Comment and report schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ReportReason = Literal["spam", "nsfw", "copyright", "other"]


class CommentCreate(BaseModel):
    """Schema for posting a comment."""

    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment must not be blank")
        return value


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: str
    username: str
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportCreate(BaseModel):
    """Schema for reporting a post to moderators."""

    reason: ReportReason
    description: str | None = Field(default=None, max_length=1000)


class ReportResponse(BaseModel):
    id: int
    post_id: int
    reason: ReportReason
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
