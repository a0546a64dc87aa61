"""Shared API dependencies for caller identity and common functionality."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from kohliverse.db.session import get_db

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(max_length=255)] = None,
) -> str:
    """Return the caller's user id as asserted by the upstream identity layer.

    Raises:
        HTTPException: If the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()


def get_optional_user_id(
    x_user_id: Annotated[str | None, Header(max_length=255)] = None,
) -> str | None:
    """Return the caller's user id when present, for personalised reads."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


def get_current_user_name(
    x_user_name: Annotated[str | None, Header(max_length=100)] = None,
) -> str | None:
    """Return the display name sent alongside the user id, if any."""
    if x_user_name is None or not x_user_name.strip():
        return None
    return x_user_name.strip()


# Type aliases for identity dependencies
CurrentUserIdDep = Annotated[str, Depends(get_current_user_id)]
OptionalUserIdDep = Annotated[str | None, Depends(get_optional_user_id)]
CurrentUserNameDep = Annotated[str | None, Depends(get_current_user_name)]
