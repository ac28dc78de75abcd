"""Structured logging for the paginated feed.

Every layer logs through structlog with snake_case event names, so a run of
the feed reads as a sequence of machine-parseable events:

    page_fetched / fetch_failed          one per request (PageFetcher)
    page_load_completed                  one per attempt (PaginationController)
    observer_failed                      an observer raised during publish
    feed_loading / feed_loaded / ...     state transitions seen by main.py

Events are rendered by the console renderer while developing and as one JSON
object per line in production. Records go through the stdlib root logger, so
the aiohttp transport's plain ``logging`` calls share the same stream.

Usage:
    from uniflow.core.logging import get_logger, configure_logging

    configure_logging()  # once, before the first feed is built
    logger = get_logger(__name__)
    logger.info("page_fetched", page=0, item_count=10)
"""

import logging
import sys
from os import getenv
from typing import Any, cast

import structlog
from structlog.types import Processor


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Route feed events through structlog and the stdlib root logger.

    Call once at startup. Loggers are cached on first use, so a logger used
    before this call keeps the default configuration.

    Args:
        development: If True, use pretty-printed output. If False, use JSON.
                    If None, reads from ENVIRONMENT env var (default: development).
        log_level: Log level string (DEBUG, INFO, WARNING, ERROR).
                  If None, reads from LOG_LEVEL env var (default: INFO).
    """
    if development is None:
        env = getenv("ENVIRONMENT", "development").lower()
        development = env != "production"

    if log_level is None:
        log_level = getenv("LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, log_level, logging.INFO)

    structlog.configure(
        processors=_build_processors(development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force=True overrides any handler installed before startup
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    logging.getLogger().setLevel(numeric_level)

    # Transport internals are noisy at INFO
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def _build_processors(development: bool) -> list[Processor]:
    """Processor chain shared by all feed events.

    Context bound with ``bind_contextvars`` (``base_url``, ``offline``) is
    merged first so it appears on every line, including ``fetch_failed``.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if development:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger for one feed component.

    Args:
        name: Logger name, typically __name__ of the calling module. It
            becomes the ``logger`` field of each event.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def bind_contextvars(**kwargs: Any) -> None:
    """Bind context variables that will be included in all subsequent log calls.

    main.py binds ``base_url`` and ``offline`` so every page event names the
    feed it belongs to.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.

    Example:
        bind_contextvars(feed="posts", base_url="https://example.com")
        logger.info("page_fetched")  # Will include feed and base_url
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Drop the feed context, e.g. between tests."""
    structlog.contextvars.clear_contextvars()


def unbind_contextvars(*keys: str) -> None:
    """Remove specific context variables.

    Args:
        *keys: Names of context variables to remove.
    """
    structlog.contextvars.unbind_contextvars(*keys)
