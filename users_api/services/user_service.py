"""User service for data access."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy import Connection, delete, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from users_api.core.exceptions import DatabaseError, UserNotFoundError
from users_api.models.users import users
from users_api.schemas.users import UserCreate, UserUpdate

logger = structlog.get_logger()


class UserService:
    """
    Service for user operations.

    Methods are synchronous and block on the driver; callers in the request
    path run them through ``run_blocking``. Each call holds one pooled
    connection for its own duration.
    """

    def __init__(self, engine: Engine):
        """Initialize service with the shared engine."""
        self.engine = engine

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        """Check out a pooled connection inside a transaction."""
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            detail = str(getattr(e, "orig", None) or e)
            raise DatabaseError(detail) from e

    def list_users(self) -> list[dict]:
        """Get every user, oldest first."""
        query = select(users).order_by(users.c.id)
        with self._connection() as conn:
            result = conn.execute(query)
            return [dict(row) for row in result.mappings()]

    def get_users_by_user_id(self, user_id: UUID) -> list[dict]:
        """Get users matching an external id (zero or one row)."""
        query = select(users).where(users.c.user_id == user_id)
        with self._connection() as conn:
            result = conn.execute(query)
            return [dict(row) for row in result.mappings()]

    def create_user(self, user_data: UserCreate) -> list[dict]:
        """Create a new user and return it."""
        query = (
            users.insert()
            .values(
                user_id=uuid4(),
                first_name=user_data.first_name,
                last_name=user_data.last_name,
                email=user_data.email,
                created_at=datetime.now(),
            )
            .returning(users)
        )

        with self._connection() as conn:
            user = conn.execute(query).mappings().first()

        if not user:
            raise DatabaseError("insert returned no row")

        logger.info("user_created", user_id=str(user["user_id"]))
        return [dict(user)]

    def update_user(self, user_id: UUID, user_data: UserUpdate) -> list[dict]:
        """Overwrite the fields present in ``user_data`` and return the user."""
        update_data = user_data.to_patch()

        with self._connection() as conn:
            if update_data:
                query = (
                    update(users)
                    .where(users.c.user_id == user_id)
                    .values(**update_data)
                    .returning(users)
                )
            else:
                query = select(users).where(users.c.user_id == user_id)
            user = conn.execute(query).mappings().first()

        if not user:
            raise UserNotFoundError()

        logger.info("user_updated", user_id=str(user_id), fields=sorted(update_data))
        return [dict(user)]

    def delete_user(self, user_id: UUID) -> list[dict]:
        """Hard delete a user and return the removed row."""
        query = delete(users).where(users.c.user_id == user_id).returning(users)

        with self._connection() as conn:
            user = conn.execute(query).mappings().first()

        if not user:
            raise UserNotFoundError()

        logger.info("user_deleted", user_id=str(user_id))
        return [dict(user)]

    def check_connection(self) -> bool:
        """Check if a pooled connection can run a query."""
        try:
            with self._connection() as conn:
                conn.execute(text("SELECT 1"))
        except DatabaseError:
            return False
        return True
