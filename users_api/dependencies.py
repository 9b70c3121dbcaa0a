"""FastAPI dependencies."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy.engine import Engine

from users_api.core.exceptions import InvalidUserIdError
from users_api.database import get_engine
from users_api.services.user_service import UserService


def get_path_user_id(id: str) -> UUID:
    """
    Parse the ``{id}`` path parameter as an external user id.

    Args:
        id: Raw path segment

    Returns:
        Parsed UUID

    Raises:
        InvalidUserIdError: If the segment is not a valid UUID
    """
    try:
        return UUID(id)
    except ValueError:
        raise InvalidUserIdError(id)


DatabaseEngine = Annotated[Engine, Depends(get_engine)]


def get_user_service(engine: DatabaseEngine) -> UserService:
    """Build a user service bound to the shared engine."""
    return UserService(engine)


# Type aliases for dependency injection
PathUserId = Annotated[UUID, Depends(get_path_user_id)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
