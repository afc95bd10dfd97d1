"""
Database and authentication dependencies for the API.
"""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from kontaflow.core.settings import settings
from kontaflow.database import get_async_db
from kontaflow.repositories.user import UserRepository
from kontaflow.schemas.user import CurrentUser
from kontaflow.utils.exceptions import ForbiddenError, UnauthorizedError
from kontaflow.utils.logging import get_logger

logger = get_logger(__name__)

# Alias for compatibility
get_db = get_async_db


async def get_authenticated_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> CurrentUser:
    """
    Resolve the caller from the user-id header.

    Development stand-in for bearer authentication: the header carries the
    numeric id of an existing, active user. Group membership is not required
    here, so a new user can create their first economic group.
    """
    raw_user_id = request.headers.get(settings.AUTH_USER_HEADER)
    if not raw_user_id:
        raise UnauthorizedError("No authentication provided")

    try:
        user_id = int(raw_user_id)
    except ValueError:
        raise UnauthorizedError("User not found")

    user = await UserRepository(db).get_with_groups(user_id)
    if user is None:
        raise UnauthorizedError("User not found")

    if not user.active:
        raise ForbiddenError("User deactivated")

    membership = user.groups[0] if user.groups else None
    current_user = CurrentUser(
        id=user.id,
        email=user.email,
        name=user.name,
        economic_group_id=membership.economic_group_id if membership else None,
        role=membership.role if membership else None
    )
    logger.debug(f"Authenticated user={current_user.id} group={current_user.economic_group_id}")
    return current_user


async def get_current_user(
    current_user: CurrentUser = Depends(get_authenticated_user)
) -> CurrentUser:
    """Authenticated user that belongs to at least one economic group."""
    if current_user.economic_group_id is None:
        raise ForbiddenError("User has no economic group assigned")
    return current_user
