"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from campus_commons.core.errors import ForbiddenError, UnauthorizedError
from campus_commons.core.security import decode_access_token
from campus_commons.db.session import get_db
from campus_commons.models import User
from campus_commons.models.enums import UserStatus
from campus_commons.services.moderation import ModerationService, get_moderation_service

# Missing credentials are reported through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If the token is missing or invalid, or names no user.
        ForbiddenError: If the account is banned or deleted.
    """
    if credentials is None:
        raise UnauthorizedError("Access token required")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    if user.status != UserStatus.ACTIVE:
        raise ForbiddenError("Account is not active")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_admin(current_user: CurrentUserDep) -> User:
    """Allow only administrators through."""
    if not current_user.is_admin:
        raise ForbiddenError("Administrator privileges required")
    return current_user


AdminUserDep = Annotated[User, Depends(require_admin)]

ModerationServiceDep = Annotated[ModerationService, Depends(get_moderation_service)]
