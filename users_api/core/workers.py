"""Worker pool for blocking database calls."""

import asyncio
import contextvars
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, TypeVar

import structlog

from users_api.config import settings
from users_api.core.exceptions import AppException

logger = structlog.get_logger()

T = TypeVar("T")

# The database driver blocks, so every call runs here instead of on the event loop
_executor: ThreadPoolExecutor | None = None


def get_executor() -> ThreadPoolExecutor:
    """Return the worker pool, starting it on first use."""
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=settings.db_worker_threads,
            thread_name_prefix="db-worker",
        )
    return _executor


def shutdown_executor() -> None:
    """Wait for in-flight calls to finish and stop the worker threads."""
    global _executor
    if _executor is not None:
        _executor.shutdown(wait=True)
        _executor = None


async def run_blocking(
    func: Callable[..., T],
    *args: Any,
    failure: type[AppException],
    **kwargs: Any,
) -> T:
    """
    Run a blocking call on the worker pool and await its result.

    Args:
        func: Blocking callable
        failure: Error kind raised when the call fails with anything other
            than an application exception

    Returns:
        Whatever ``func`` returns

    Raises:
        AppException: Raised inside the worker, or ``failure`` for any other error
    """
    loop = asyncio.get_running_loop()
    # Worker threads log with the request's bound context
    call = partial(contextvars.copy_context().run, func, *args, **kwargs)
    try:
        return await loop.run_in_executor(get_executor(), call)
    except AppException:
        raise
    except Exception as e:
        logger.error(
            "worker_call_failed",
            operation=getattr(func, "__name__", repr(func)),
            error=str(e),
        )
        raise failure() from e
