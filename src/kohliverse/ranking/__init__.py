"""Ranking and voting engine.

Pure functions over caller-supplied state; persistence lives in
``kohliverse.repositories`` and ``kohliverse.services``.
"""

from .errors import (
    ConcurrencyConflict,
    DuplicateSubmission,
    InvalidDirection,
    InvalidVoteState,
    RankingError,
    SelfVoteForbidden,
    UnrecognizedUrl,
)
from .scoring import InvalidSortMode, ScoreModel, SortMode, hot, new, sort_posts, top
from .submission import (
    Duplicate,
    Platform,
    SubmissionGuard,
    Unique,
    VideoRef,
    extract_video,
    fingerprint,
)
from .votes import VoteAction, VoteDelta, VoteDirection, VoteOutcome, cast_vote

__all__ = [
    "ConcurrencyConflict", "DuplicateSubmission", "InvalidDirection", "InvalidVoteState",
    "RankingError", "SelfVoteForbidden", "UnrecognizedUrl",
    "InvalidSortMode", "ScoreModel", "SortMode", "hot", "new", "sort_posts", "top",
    "Duplicate", "Platform", "SubmissionGuard", "Unique", "VideoRef",
    "extract_video", "fingerprint",
    "VoteAction", "VoteDelta", "VoteDirection", "VoteOutcome", "cast_vote",
]
