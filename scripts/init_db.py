"""Script to initialize the database."""

import structlog

from users_api.database import engine
from users_api.core.logging import configure_logging
from users_api.models import metadata

logger = structlog.get_logger()


def init_db() -> None:
    """Initialize the database by creating the users table."""
    with engine.begin() as conn:
        metadata.create_all(conn)

    logger.info("database_initialized", tables=sorted(metadata.tables))


if __name__ == "__main__":
    configure_logging()
    init_db()
