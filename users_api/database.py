"""Database configuration and connection management."""

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Engine, make_url

from users_api.config import settings


def _is_sqlite_memory(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build the engine that owns the bounded connection pool.

    Every URL gets a ``QueuePool``, so a checked out connection belongs to one
    worker thread until it is returned. Server databases and SQLite files are
    capped at ``DB_POOL_SIZE`` plus ``DB_MAX_OVERFLOW`` connections. An
    in-memory SQLite database only exists inside its one connection, so that
    pool holds exactly one and callers queue for it.
    """
    if _is_sqlite_memory(database_url):
        return create_engine(
            database_url,
            echo=echo,
            poolclass=pool.QueuePool,
            pool_size=1,
            max_overflow=0,
            pool_timeout=settings.db_pool_timeout,
            connect_args={"check_same_thread": False},
        )

    connect_args: dict = {}
    if make_url(database_url).get_backend_name() == "sqlite":
        # Writers wait on the file lock instead of failing at once
        connect_args = {"check_same_thread": False, "timeout": settings.db_pool_timeout}

    return create_engine(
        database_url,
        echo=echo,
        poolclass=pool.QueuePool,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=3600,
        connect_args=connect_args,
    )


# Shared application-wide pool handle
engine: Engine = build_engine(settings.database_url, echo=settings.debug)


def get_engine() -> Engine:
    """Dependency for getting the shared engine."""
    return engine
