"""Business logic services for the KohliVerse application."""

from .comment_service import CommentService, ReportService
from .post_service import PostService, rerank_posts
from .vote_service import PostNotFound, VoteResult, VoteService

__all__ = [
    "CommentService",
    "PostService",
    "PostNotFound",
    "ReportService",
    "VoteResult",
    "VoteService",
    "rerank_posts",
]
