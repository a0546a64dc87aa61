"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, ReportCreate, ReportResponse
from .post import DuplicateCheckRequest, DuplicateCheckResponse, PostCreate, PostResponse
from .user import CreatorResponse, NotificationResponse
from .vote import MyVoteResponse, VoteCreate, VoteResponse

__all__ = [
    "CommentCreate", "CommentResponse", "ReportCreate", "ReportResponse",
    "DuplicateCheckRequest", "DuplicateCheckResponse", "PostCreate", "PostResponse",
    "CreatorResponse", "NotificationResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse",
]
