"""Paginated collection controller - platform agnostic.

The controller owns the load state of one collection and the page counter.
Consumers observe the state through ``subscribe`` and drive it with
``load_next_page`` and ``reset``; they never write state themselves.

State flow:

    Uninitialized -> Loading -> Loaded | Failed -> Loading -> ...

Every transition is published to observers. Neither command raises: any error
on the fetch path ends in a published ``Failed`` state.

Concurrency: the in-flight guard and the switch to ``Loading`` run before the
only ``await``, so calls made from one event loop cannot overlap. Callers on
several threads must serialize calls themselves. A fetch that has started is
always applied, even if ``reset`` ran while it was in flight.
"""

from typing import Generic, TypeVar

from uniflow.core.immutable_list import ImmutableList
from uniflow.core.load_state import (
    Failed,
    Fault,
    Loaded,
    Loading,
    LoadState,
    Uninitialized,
    is_terminal,
)
from uniflow.core.logging import get_logger
from uniflow.core.observable import Observer, ObservableValue, Unsubscribe
from uniflow.core.page_fetcher import PageFetcher, PageToken

logger = get_logger(__name__)

T = TypeVar("T")


class PaginationController(Generic[T]):
    """Loads a collection page by page and accumulates the items.

    Example:
        controller = PaginationController(PageFetcher(transport, base_url))
        controller.subscribe(render)
        await controller.reset()           # first page
        await controller.load_next_page()  # appended to the first
    """

    def __init__(self, fetcher: PageFetcher[T]) -> None:
        """Initialize the controller.

        Args:
            fetcher: Performs the network call for each page.
        """
        self._fetcher = fetcher
        self._state: ObservableValue[LoadState[T]] = ObservableValue(Uninitialized())
        self._page_count = 0

    @property
    def state(self) -> LoadState[T]:
        """The current load state."""
        return self._state.value

    @property
    def page_count(self) -> int:
        """Number of completed fetch attempts since the last reset.

        Counts failures too, so it is not a reliable page index.
        """
        return self._page_count

    @property
    def item_count(self) -> int | None:
        """Number of accumulated items, or None when nothing is loaded."""
        state = self._state.value
        if isinstance(state, Loaded):
            return len(state.items)
        return None

    @property
    def has_more(self) -> bool:
        """Whether a call to ``load_next_page`` may fetch anything."""
        return not is_terminal(self._state.value)

    def subscribe(self, observer: Observer[LoadState[T]]) -> Unsubscribe:
        """Register an observer for every published state.

        Returns:
            A callable that removes the observer.
        """
        return self._state.subscribe(observer)

    async def load_next_page(self) -> None:
        """Fetch the next page and append it to the accumulated items.

        Does nothing while a fetch is in flight or after the last page.
        """
        current = self._state.value

        if isinstance(current, Loading):
            logger.debug("fetch_ignored_in_flight", page=current.cursor)
            return

        if is_terminal(current):
            logger.debug("fetch_ignored_no_more_pages", page_count=self._page_count)
            return

        try:
            token, prior = self._next_request(current)
            self._state.publish(Loading(items=prior, cursor=token))

            result = await self._fetcher.fetch(token)
            final = self._merge(current, result)
        except Exception as ex:
            logger.exception("load_next_page_failed", page_count=self._page_count)
            final = Failed(error=Fault.from_exception(ex))

        self._page_count += 1

        logger.info(
            "page_load_completed",
            state=type(final).__name__,
            page_count=self._page_count,
            item_count=len(final.items) if isinstance(final, Loaded) else None,
        )
        self._state.publish(final)

    async def reset(self) -> None:
        """Discard all items and load the first page again."""
        self._page_count = 0
        self._state.publish(Uninitialized())
        await self.load_next_page()

    def _next_request(self, current: LoadState[T]) -> tuple[PageToken, ImmutableList[T]]:
        if isinstance(current, Loaded) and current.cursor is not None:
            return current.cursor, current.items
        if isinstance(current, (Uninitialized, Failed)):
            # A failure dropped the accumulated items, so start over
            return self._fetcher.first_page(), ImmutableList.empty()
        raise TypeError(f"Cannot request a page from {type(current).__name__}")

    def _merge(self, before: LoadState[T], result: LoadState[T]) -> LoadState[T]:
        if isinstance(result, Loaded) and isinstance(before, Loaded):
            return Loaded(items=before.items.add_all(result.items), cursor=result.cursor)
        if isinstance(result, (Loaded, Failed)):
            return result
        raise TypeError(f"Unexpected fetch result {type(result).__name__}")
