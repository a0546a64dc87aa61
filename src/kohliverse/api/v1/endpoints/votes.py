# src/kohliverse/api/v1/endpoints/votes.py
"""Vote-related endpoints for the KohliVerse API."""

from fastapi import APIRouter, HTTPException, status

from kohliverse.api.v1.dependencies import CurrentUserIdDep, SessionDep
from kohliverse.ranking.errors import (
    ConcurrencyConflict,
    InvalidDirection,
    InvalidVoteState,
    SelfVoteForbidden,
)
from kohliverse.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse
from kohliverse.services.vote_service import PostNotFound, VoteService

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    user_id: CurrentUserIdDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, switch or retract a vote on a post.

    Clicking the direction the caller already voted retracts the vote.
    """
    try:
        result = VoteService(db).cast(user_id, vote_data.post_id, vote_data.direction)
    except PostNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        ) from exc
    except InvalidDirection as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    except SelfVoteForbidden as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except (ConcurrencyConflict, InvalidVoteState) as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vote could not be applied, please retry",
        ) from exc

    return VoteResponse(
        post_id=result.post_id,
        new_state=result.new_state.value if result.new_state is not None else None,
        upvotes=result.upvotes,
        downvotes=result.downvotes,
        hot_score=result.hot_score,
    )


@router.get("/{post_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    post_id: int,
    user_id: CurrentUserIdDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get current user's vote on a specific post."""
    direction = VoteService(db).current_vote(user_id, post_id)
    return MyVoteResponse(direction=direction.value if direction is not None else None)
