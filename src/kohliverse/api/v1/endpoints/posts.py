# src/kohliverse/api/v1/endpoints/posts.py
"""Post-related endpoints for the KohliVerse API."""

from fastapi import APIRouter, HTTPException, Query, status

from kohliverse.api.v1.dependencies import (
    CurrentUserIdDep,
    CurrentUserNameDep,
    OptionalUserIdDep,
    SessionDep,
)
from kohliverse.core.settings import settings
from kohliverse.models import Post
from kohliverse.ranking.errors import DuplicateSubmission, UnrecognizedUrl
from kohliverse.ranking.scoring import SortMode
from kohliverse.ranking.submission import Duplicate
from kohliverse.repositories.post_repo import PostRepository
from kohliverse.repositories.vote_repo import VoteRepository
from kohliverse.schemas.comment import (
    CommentCreate,
    CommentResponse,
    ReportCreate,
    ReportResponse,
)
from kohliverse.schemas.post import (
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    PostCreate,
    PostResponse,
)
from kohliverse.services.comment_service import CommentService, ReportService
from kohliverse.services.post_service import PostService
from kohliverse.services.vote_service import PostNotFound

router = APIRouter(prefix="/posts", tags=["posts"])


def _to_response(post: Post, votes: VoteRepository | None, user_id: str | None) -> PostResponse:
    response = PostResponse.model_validate(post)
    if votes is not None and user_id is not None:
        direction = votes.get_direction(user_id, post.id)
        if direction is not None:
            response = response.model_copy(update={"user_vote": direction.value})
    return response


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    user_id: OptionalUserIdDep,
    sort: SortMode = Query(SortMode.HOT, description="hot, new or top"),
    limit: int = Query(
        settings.feed_default_limit,
        ge=1,
        le=settings.feed_max_limit,
        description="Maximum number of posts to return",
    ),
    offset: int = Query(0, ge=0),
    author_id: str | None = Query(None, description="Only posts by this author"),
) -> list[PostResponse]:
    """List posts in the requested sort order.

    Args:
        db: Database session
        user_id: Optional caller id used to attach the caller's vote
        sort: Feed ordering
        limit: Maximum number of posts to return
        offset: Number of posts to skip
        author_id: Restrict to one author's posts

    Returns:
        Posts ordered best-first
    """
    posts = PostRepository(db).list_sorted(sort, limit=limit, offset=offset, author_id=author_id)
    votes = VoteRepository(db)
    return [_to_response(post, votes, user_id) for post in posts]


@router.get("/search", response_model=list[PostResponse])
async def search_posts(
    db: SessionDep,
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(settings.feed_default_limit, ge=1, le=settings.feed_max_limit),
) -> list[PostResponse]:
    """Search post titles, newest first."""
    posts = PostRepository(db).search(q, limit)
    return [_to_response(post, None, None) for post in posts]


@router.post("/check-duplicate", response_model=DuplicateCheckResponse)
async def check_duplicate(
    payload: DuplicateCheckRequest,
    db: SessionDep,
) -> DuplicateCheckResponse:
    """Tell the submit form whether the video was already posted.

    Raises:
        HTTPException: If the URL is not a supported video link
    """
    try:
        verdict = PostService(db).check_duplicate(payload.url)
    except UnrecognizedUrl as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    existing: dict[str, object] = {}
    if isinstance(verdict, Duplicate):
        existing = {
            "existing_post_id": verdict.existing_post_id,
            "existing_title": verdict.existing_title,
        }
    return DuplicateCheckResponse(
        is_duplicate=verdict.is_duplicate,
        platform=verdict.video.platform.value,
        video_id=verdict.video.video_id,
        **existing,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    db: SessionDep,
    user_id: OptionalUserIdDep,
) -> PostResponse:
    """Get a specific post by ID.

    Raises:
        HTTPException: If post not found
    """
    post = PostRepository(db).get_by_id(post_id)
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return _to_response(post, VoteRepository(db), user_id)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    user_id: CurrentUserIdDep,
    user_name: CurrentUserNameDep,
    db: SessionDep,
) -> PostResponse:
    """Submit a video link.

    Args:
        post_data: URL, title and tags
        user_id: Submitting user
        user_name: Display name of the submitting user
        db: Database session

    Returns:
        Created post

    Raises:
        HTTPException: 400 for unsupported URLs, 409 when the video was already submitted
    """
    service = PostService(db)
    try:
        post = service.submit(
            author_id=user_id,
            author_name=user_name,
            url=post_data.url,
            title=post_data.title,
            tags=post_data.tags,
        )
    except UnrecognizedUrl as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except DuplicateSubmission as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(exc),
                "existing_post_id": exc.existing_post_id,
                "existing_title": exc.existing_title,
            },
        ) from exc
    return _to_response(post, None, None)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    user_id: CurrentUserIdDep,
    db: SessionDep,
) -> None:
    """Delete a post (author only).

    Raises:
        HTTPException: If post not found or user is not the author
    """
    try:
        PostService(db).delete(user_id=user_id, post_id=post_id)
    except PostNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        ) from exc
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    post_id: int,
    db: SessionDep,
    limit: int = Query(100, ge=1, le=500),
) -> list[CommentResponse]:
    """List a post's comments, newest first."""
    try:
        comments = CommentService(db).list_for_post(post_id, limit)
    except PostNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        ) from exc
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    user_id: CurrentUserIdDep,
    user_name: CurrentUserNameDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post; the post's comment count moves with it.

    Raises:
        HTTPException: If post not found
    """
    try:
        comment = CommentService(db).add(
            post_id=post_id,
            user_id=user_id,
            username=user_name,
            content=comment_data.content,
        )
    except PostNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        ) from exc
    return CommentResponse.model_validate(comment)


@router.post(
    "/{post_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_post(
    post_id: int,
    report_data: ReportCreate,
    user_id: CurrentUserIdDep,
    db: SessionDep,
) -> ReportResponse:
    """Report a post to moderators."""
    try:
        report = ReportService(db).file(
            reporter_id=user_id,
            post_id=post_id,
            reason=report_data.reason,
            description=report_data.description,
        )
    except PostNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        ) from exc
    return ReportResponse.model_validate(report)
