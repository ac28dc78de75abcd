"""Runtime settings read from the environment.

Variables:
    UNIFLOW_BASE_URL: API root (default: https://jsonplaceholder.typicode.com)
    UNIFLOW_PAGE_SIZE: Items per page (default: 10)
    UNIFLOW_REQUEST_TIMEOUT: Total request timeout in seconds (default: 30)
    UNIFLOW_MAX_PAGES: Pages the demo loads before stopping, 0 for all (default: 0)
    UNIFLOW_OFFLINE: Serve pages from memory instead of the network (default: off)
"""

import math
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TypeVar

DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"

N = TypeVar("N", int, float)


@dataclass(frozen=True)
class FeedSettings:
    """Settings for one paginated feed.

    Attributes:
        base_url: Root of the API.
        page_size: Items requested per page.
        request_timeout: Total timeout for one request, in seconds.
        max_pages: Upper bound on pages loaded by the demo; 0 means no bound.
        offline: Use the in-memory transport.
    """

    base_url: str = DEFAULT_BASE_URL
    page_size: int = 10
    request_timeout: float = 30.0
    max_pages: int = 0
    offline: bool = False

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError("UNIFLOW_PAGE_SIZE must be a positive integer")
        if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
            raise ValueError("UNIFLOW_REQUEST_TIMEOUT must be positive and finite")
        if self.max_pages < 0:
            raise ValueError("UNIFLOW_MAX_PAGES must not be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FeedSettings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("UNIFLOW_BASE_URL", DEFAULT_BASE_URL),
            page_size=_parse(env, "UNIFLOW_PAGE_SIZE", int, 10),
            request_timeout=_parse(env, "UNIFLOW_REQUEST_TIMEOUT", float, 30.0),
            max_pages=_parse(env, "UNIFLOW_MAX_PAGES", int, 0),
            offline=env.get("UNIFLOW_OFFLINE", "").lower() in ("1", "true", "yes"),
        )


def _parse(
    env: Mapping[str, str], name: str, convert: Callable[[str], N], default: N
) -> N:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return convert(raw)
    except ValueError:
        raise ValueError(f"{name} has invalid value {raw!r}") from None
