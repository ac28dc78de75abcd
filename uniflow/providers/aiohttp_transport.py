"""aiohttp implementation of the HttpTransport protocol.

Example:
    async with AiohttpTransport(timeout=10) as transport:
        response = await transport.get("https://example.com/posts?_start=0&_limit=10")
"""

from __future__ import annotations

import logging
from types import TracebackType

import aiohttp

from uniflow.core.errors import ErrorCategory, TransportError
from uniflow.ports.transport import HttpResponse

logger = logging.getLogger(__name__)


class AiohttpTransport:
    """HTTP GET over a shared ``aiohttp.ClientSession``.

    The session is injected or opened lazily on first use; a lazily opened
    session is owned by the transport and closed by ``close()``. Network
    failures and timeouts are raised as ``TransportError``. Non-200 responses
    are returned, not raised.

    Attributes:
        _session: The client session, if one is open.
        _owns_session: Whether ``close()`` should close the session.
        _timeout: Total timeout applied to every request.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the transport.

        Args:
            session: An existing session to reuse. The caller keeps ownership.
            timeout: Total request timeout in seconds. Defaults to 30.
        """
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def __aenter__(self) -> AiohttpTransport:
        self._ensure_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this transport opened it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def get(self, url: str) -> HttpResponse:
        """Issue a GET request.

        Args:
            url: Absolute URL including the query string.

        Returns:
            The response with its status, body and headers.

        Raises:
            TransportError: If the request could not be completed.
        """
        session = self._ensure_session()
        logger.debug("GET %s", url)

        try:
            async with session.get(url, timeout=self._timeout) as response:
                body = await response.read()
                return HttpResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers),
                )
        except aiohttp.ClientError as ex:
            logger.error("Network error during GET %s: %s", url, ex)
            raise TransportError(
                f"Network error during request: {ex}",
                category=ErrorCategory.NETWORK,
                original_error=ex,
            ) from ex
        except TimeoutError as ex:
            logger.error("Timed out during GET %s", url)
            raise TransportError(
                f"Request timed out after {self._timeout.total}s", original_error=ex
            ) from ex
