"""Error classification and handling utilities.

This module classifies failures on the fetch path so that callers can decide
how to present them. The core never retries on its own: a failure becomes a
``Failed`` load state and the caller chooses whether to load again.

Example:
    from uniflow.core.errors import TransportError, classify_error, is_retryable

    try:
        response = await transport.get(url)
    except TransportError as ex:
        if is_retryable(ex.category):
            # Offer a retry affordance
            pass
"""

import asyncio
import json
from enum import Enum, auto


class ErrorCategory(Enum):
    """Classification of error types for handling decisions."""

    # Transient errors - safe to retry
    RATE_LIMIT = auto()  # API rate limiting
    TIMEOUT = auto()  # Request/operation timeout
    NETWORK = auto()  # Network connectivity issues
    SERVICE_UNAVAILABLE = auto()  # Temporary service outage (5xx)

    # Permanent errors - should not retry
    INVALID_INPUT = auto()  # Bad request data (4xx)
    AUTH_FAILURE = auto()  # Authentication/authorization error
    NOT_FOUND = auto()  # Resource not found
    MALFORMED_RESPONSE = auto()  # Body could not be decoded
    UNKNOWN = auto()  # Unclassified error


# Categories that are safe to retry
RETRYABLE_CATEGORIES = {
    ErrorCategory.RATE_LIMIT,
    ErrorCategory.TIMEOUT,
    ErrorCategory.NETWORK,
    ErrorCategory.SERVICE_UNAVAILABLE,
}


class TransportError(Exception):
    """A request could not be completed or returned a non-200 status.

    Attributes:
        status: The HTTP status code, if a response was received.
        category: The classified error category.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        category: ErrorCategory | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.original_error = original_error
        if category is None:
            if status is not None:
                category = category_for_status(status)
            elif original_error is not None:
                category = classify_error(original_error)
            else:
                category = ErrorCategory.NETWORK
        self.category = category

    @classmethod
    def from_exception(cls, ex: Exception) -> "TransportError":
        """Create a TransportError from an existing exception."""
        return cls(
            message=str(ex) or type(ex).__name__,
            original_error=ex,
        )


class ParseError(Exception):
    """A single record did not match the expected item schema.

    Never surfaced to observers: the fetcher drops the offending record and
    keeps the rest of the page.
    """

    def __init__(self, message: str, raw: object = None) -> None:
        super().__init__(message)
        self.raw = raw


def category_for_status(status: int) -> ErrorCategory:
    """Map an HTTP status code to an error category.

    Args:
        status: The HTTP status code of a failed response.

    Returns:
        The ErrorCategory for that status.
    """
    if status == 429:
        return ErrorCategory.RATE_LIMIT
    if status in (401, 403):
        return ErrorCategory.AUTH_FAILURE
    if status == 404:
        return ErrorCategory.NOT_FOUND
    if status in (408, 504):
        return ErrorCategory.TIMEOUT
    if status >= 500:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if status >= 400:
        return ErrorCategory.INVALID_INPUT
    return ErrorCategory.UNKNOWN


def classify_error(error: Exception) -> ErrorCategory:
    """Classify an exception into an error category.

    Args:
        error: The exception to classify.

    Returns:
        The ErrorCategory that best matches the error.
    """
    if isinstance(error, TransportError):
        return error.category

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError, ParseError)):
        return ErrorCategory.MALFORMED_RESPONSE

    if isinstance(error, ConnectionError):
        return ErrorCategory.NETWORK

    error_str = str(error).lower()

    if "connection" in error_str or "network" in error_str:
        return ErrorCategory.NETWORK

    if "429" in error_str or "too many requests" in error_str:
        return ErrorCategory.RATE_LIMIT
    if "rate" in error_str and "limit" in error_str:
        return ErrorCategory.RATE_LIMIT

    if "503" in error_str or "service unavailable" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if "502" in error_str or "bad gateway" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE

    if "401" in error_str or "unauthorized" in error_str:
        return ErrorCategory.AUTH_FAILURE
    if "403" in error_str or "forbidden" in error_str:
        return ErrorCategory.AUTH_FAILURE

    if "404" in error_str or "not found" in error_str:
        return ErrorCategory.NOT_FOUND

    if "400" in error_str or "bad request" in error_str:
        return ErrorCategory.INVALID_INPUT

    return ErrorCategory.UNKNOWN


def is_retryable(category: ErrorCategory) -> bool:
    """Check if an error category is safe to retry.

    Args:
        category: The error category to check.

    Returns:
        True if the error is transient and a manual retry may succeed.
    """
    return category in RETRYABLE_CATEGORIES
