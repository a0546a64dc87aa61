"""SQLAlchemy models for the KohliVerse application."""

from .comment import Comment, Report
from .notification import Notification
from .post import Post
from .user import User
from .vote import PostVote

__all__ = [
    "Comment",
    "Notification",
    "Post",
    "PostVote",
    "Report",
    "User",
]
