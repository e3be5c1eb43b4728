import logging
import sys
from contextlib import AbstractContextManager

import structlog

from pagekit.core.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Console output when settings.debug, JSON lines otherwise."""
    if settings is None:
        settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def paging_context(page_number: int, page_size: int) -> AbstractContextManager:
    """Bind page_number/page_size to every log line emitted inside the block."""
    return structlog.contextvars.bound_contextvars(page_number=page_number, page_size=page_size)
