"""Transport protocol for the fetch path.

This module defines the interface the core needs from an HTTP client: one
asynchronous GET that returns the status, raw body and headers. The core
never builds a client itself; an implementation is injected.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class HttpResponse:
    """A completed HTTP response.

    Attributes:
        status: The HTTP status code.
        body: The raw response body.
        headers: Response headers. Names are lower-cased on construction so
            lookups are case-insensitive.
    """

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "headers",
            {name.lower(): value for name, value in self.headers.items()},
        )

    def header(self, name: str) -> str | None:
        """Return a header value by case-insensitive name, or None."""
        return self.headers.get(name.lower())

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the body."""
        return self.body.decode(encoding)


# =============================================================================
# Transport Protocol
# =============================================================================


class HttpTransport(Protocol):
    """Protocol for the HTTP GET collaborator.

    Implementations report failed requests either by returning a non-200
    status or by raising; callers must handle both. Timeouts are the
    implementation's responsibility.
    """

    async def get(self, url: str) -> HttpResponse:
        """Issue a GET request.

        Args:
            url: Absolute URL including the query string.

        Returns:
            The response, whatever its status.
        """
        ...
