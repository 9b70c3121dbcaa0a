"""structlog setup shared by the server and the scripts."""

import logging
import sys

import structlog
from structlog.typing import Processor

from users_api.config import settings


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """Route structlog events through stdlib logging to stdout."""
    level = getattr(logging, (log_level or settings.log_level).upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(log_format or settings.log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
