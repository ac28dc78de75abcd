"""Core paging logic, models and ambient utilities.

This module contains the platform-agnostic state machine, the load state
model and the logging, error and configuration helpers it relies on.
"""

from uniflow.core.config import FeedSettings
from uniflow.core.errors import (
    ErrorCategory,
    ParseError,
    TransportError,
    category_for_status,
    classify_error,
    is_retryable,
)
from uniflow.core.immutable_list import ImmutableList
from uniflow.core.load_state import (
    Failed,
    Fault,
    Loaded,
    Loading,
    LoadState,
    Uninitialized,
    is_terminal,
    items_of,
)
from uniflow.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    unbind_contextvars,
)
from uniflow.core.observable import ObservableValue
from uniflow.core.page_fetcher import PageFetcher, PageToken
from uniflow.core.pagination import PaginationController
from uniflow.core.posts import Post, parse_post

__all__ = [
    # Configuration
    "FeedSettings",
    # Error handling
    "ErrorCategory",
    "ParseError",
    "TransportError",
    "category_for_status",
    "classify_error",
    "is_retryable",
    # Load state
    "Failed",
    "Fault",
    "ImmutableList",
    "Loaded",
    "Loading",
    "LoadState",
    "Uninitialized",
    "is_terminal",
    "items_of",
    # Logging
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "get_logger",
    "unbind_contextvars",
    # Paging
    "ObservableValue",
    "PageFetcher",
    "PageToken",
    "PaginationController",
    # Posts
    "Post",
    "parse_post",
]
