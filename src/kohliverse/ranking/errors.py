"""Exceptions raised by the ranking and voting engine."""

from __future__ import annotations


class RankingError(RuntimeError):
    """Base exception for ranking-engine failures.

    None of these are fatal; each is recoverable at the request boundary.
    """


class InvalidDirection(RankingError, ValueError):
    """Raised when a vote direction is neither ``up`` nor ``down``."""

    def __init__(self, direction: object) -> None:
        super().__init__(f"Invalid vote direction: {direction!r}")
        self.direction = direction


class SelfVoteForbidden(RankingError):
    """Raised when an author votes on their own post and policy forbids it."""


class InvalidVoteState(RankingError):
    """Raised when the stored vote and the post counters cannot be reconciled.

    Either a delta would push a counter below zero or an outcome that must
    write a vote carries no direction.
    """


class UnrecognizedUrl(RankingError, ValueError):
    """Raised when a URL matches none of the supported platform patterns."""

    def __init__(self, url: str) -> None:
        super().__init__("Please enter a valid YouTube or Instagram URL")
        self.url = url


class ConcurrencyConflict(RankingError):
    """Raised when an atomic read-modify-write lost a race; callers may retry."""


class DuplicateSubmission(RankingError):
    """Raised when a submission is blocked because the video was already posted."""

    def __init__(self, existing_post_id: int, existing_title: str) -> None:
        super().__init__(f"This video was already submitted as post {existing_post_id}")
        self.existing_post_id = existing_post_id
        self.existing_title = existing_title
