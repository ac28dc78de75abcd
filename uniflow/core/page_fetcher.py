"""Single-page fetch for offset-paginated REST collections.

``PageFetcher.fetch`` performs one GET and classifies the outcome as a
``LoadState``. It never raises, so the controller can call it without
surrounding error handling, and it never retries.

The endpoint is expected to follow the JSONPlaceholder convention:

    GET <base_url>/<resource>?_start=<offset>&_limit=<page_size>

returning a JSON array and an ``x-total-count`` header with the size of the
whole collection.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

from uniflow.core.errors import ParseError, TransportError, is_retryable
from uniflow.core.immutable_list import ImmutableList
from uniflow.core.load_state import Failed, Fault, Loaded, LoadState
from uniflow.core.logging import get_logger
from uniflow.core.posts import parse_post
from uniflow.ports.transport import HttpResponse, HttpTransport

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
TOTAL_COUNT_HEADER = "x-total-count"


@dataclass(frozen=True)
class PageToken:
    """Identifies one page of a collection.

    Attributes:
        page: Zero-based page index.
        page_size: Number of items per page.
    """

    page: int
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError(f"page must be non-negative, got {self.page}")
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    @classmethod
    def first(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "PageToken":
        return cls(page=0, page_size=page_size)

    @property
    def start(self) -> int:
        """Offset of the first item on this page."""
        return self.page * self.page_size

    def next(self) -> "PageToken":
        return PageToken(page=self.page + 1, page_size=self.page_size)


class PageFetcher(Generic[T]):
    """Fetches one page and maps the response to a load state.

    Attributes:
        base_url: Root of the API, without a trailing slash.
        resource: Collection path under ``base_url``.
        page_size: Size of the pages this fetcher requests.
    """

    def __init__(
        self,
        transport: HttpTransport,
        base_url: str,
        *,
        resource: str = "posts",
        page_size: int = DEFAULT_PAGE_SIZE,
        parse_item: Callable[[Any], T | None] = parse_post,  # type: ignore[assignment]
    ) -> None:
        """Initialize the fetcher.

        Args:
            transport: The HTTP collaborator used for every request.
            base_url: Root of the API (e.g. "https://jsonplaceholder.typicode.com").
            resource: Collection path. Defaults to "posts".
            page_size: Items per page. Defaults to 10.
            parse_item: Converts one decoded JSON element to an item, returning
                None for elements that do not match. Defaults to ``parse_post``.
        """
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._transport = transport
        self.base_url = base_url.rstrip("/")
        self.resource = resource.strip("/")
        self.page_size = page_size
        self._parse_item = parse_item

    def first_page(self) -> PageToken:
        """Token for the first page of the collection."""
        return PageToken.first(self.page_size)

    def url_for(self, token: PageToken) -> str:
        query = urlencode({"_start": token.start, "_limit": token.page_size})
        return f"{self.base_url}/{self.resource}?{query}"

    async def fetch(self, token: PageToken) -> LoadState[T]:
        """Fetch the page identified by ``token``.

        Args:
            token: The page to fetch.

        Returns:
            ``Loaded`` with this page's items only and the next page's token
            (None on the last page), or ``Failed`` describing the error.
        """
        url = self.url_for(token)

        try:
            response = await self._transport.get(url)
        except Exception as ex:
            return self._failed(url, Fault.from_exception(ex))

        if response.status != 200:
            error = TransportError(
                f"Failed to load data: {response.status}", status=response.status
            )
            return self._failed(url, Fault.from_exception(error))

        try:
            items = self._parse_page(response.body)
        except Exception as ex:
            return self._failed(url, Fault.from_exception(ex))

        cursor = self._next_cursor(token, response)

        logger.debug(
            "page_fetched",
            url=url,
            status=response.status,
            item_count=len(items),
            has_next=cursor is not None,
        )
        return Loaded(items=items, cursor=cursor)

    def _parse_page(self, body: bytes) -> ImmutableList[T]:
        data = json.loads(body)
        if not isinstance(data, list):
            raise ParseError(
                f"Expected a JSON array, got {type(data).__name__}", data
            )

        parsed = [self._parse_item(element) for element in data]
        items: ImmutableList[T] = ImmutableList(
            item for item in parsed if item is not None
        )

        dropped = len(data) - len(items)
        if dropped:
            logger.debug("records_dropped", dropped=dropped, received=len(data))
        return items

    def _next_cursor(self, token: PageToken, response: HttpResponse) -> PageToken | None:
        raw_total = response.header(TOTAL_COUNT_HEADER)
        try:
            total = int(raw_total) if raw_total is not None else 0
        except ValueError:
            logger.debug("invalid_total_count", value=raw_total)
            total = 0

        if (token.page + 1) * token.page_size < total:
            return token.next()
        return None

    def _failed(self, url: str, fault: Fault) -> Failed:
        logger.warning(
            "fetch_failed",
            url=url,
            error=fault.message,
            status=fault.status,
            category=fault.category.name,
            retryable=is_retryable(fault.category),
        )
        return Failed(error=fault)
