# src/kohliverse/api/v1/endpoints/notifications.py
"""Notification endpoints for the current user."""

from fastapi import APIRouter, HTTPException, Query, status

from kohliverse.api.v1.dependencies import CurrentUserIdDep, SessionDep
from kohliverse.repositories.notification_repo import NotificationRepository
from kohliverse.schemas.user import NotificationResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationResponse])
async def list_notifications(
    user_id: CurrentUserIdDep,
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100),
) -> list[NotificationResponse]:
    """Return the caller's latest notifications."""
    notifications = NotificationRepository(db).list_for_user(user_id, limit)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: int,
    user_id: CurrentUserIdDep,
    db: SessionDep,
) -> NotificationResponse:
    """Mark one of the caller's notifications as read."""
    notification = NotificationRepository(db).mark_read(user_id, notification_id)
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    db.commit()
    return NotificationResponse.model_validate(notification)
