"""Entry point for the headless posts feed.

Loads the posts collection page by page and logs every state transition,
standing in for a UI that would render them.
"""

import asyncio

from uniflow.adapters import InMemoryTransport
from uniflow.core import (
    FeedSettings,
    Failed,
    Loaded,
    Loading,
    LoadState,
    PageFetcher,
    PaginationController,
    Post,
    bind_contextvars,
    configure_logging,
    get_logger,
)
from uniflow.ports import HttpTransport
from uniflow.providers import AiohttpTransport

# Configure structured logging (reads ENVIRONMENT and LOG_LEVEL from env)
configure_logging()

logger = get_logger(__name__)


def log_state(state: LoadState[Post]) -> None:
    """Observer that reports each published state."""
    if isinstance(state, Loading):
        logger.info("feed_loading", loaded=len(state.items), page=state.cursor.page)
    elif isinstance(state, Loaded):
        last = state.items.element_at_or_none(len(state.items) - 1)
        logger.info(
            "feed_loaded",
            loaded=len(state.items),
            last_title=last.title if last else None,
            more=state.cursor is not None,
        )
    elif isinstance(state, Failed):
        logger.warning("feed_failed", error=state.error.message)
    else:
        logger.info("feed_reset")


def build_controller(
    settings: FeedSettings, transport: HttpTransport
) -> PaginationController[Post]:
    """Wire a controller for the posts collection."""
    fetcher: PageFetcher[Post] = PageFetcher(
        transport, settings.base_url, page_size=settings.page_size
    )
    return PaginationController(fetcher)


async def run_feed(
    controller: PaginationController[Post], max_pages: int = 0
) -> LoadState[Post]:
    """Load pages until the collection ends, a fetch fails or ``max_pages`` is hit.

    Args:
        controller: The controller to drive.
        max_pages: Stop after this many fetch attempts; 0 for no limit.

    Returns:
        The final state.
    """
    await controller.reset()
    while controller.has_more and not isinstance(controller.state, Failed):
        if max_pages and controller.page_count >= max_pages:
            break
        await controller.load_next_page()
    return controller.state


async def main() -> None:
    """Load the feed with the configured transport."""
    settings = FeedSettings.from_env()
    bind_contextvars(base_url=settings.base_url, offline=settings.offline)

    if settings.offline:
        controller = build_controller(settings, InMemoryTransport())
        controller.subscribe(log_state)
        final = await run_feed(controller, settings.max_pages)
    else:
        async with AiohttpTransport(timeout=settings.request_timeout) as transport:
            controller = build_controller(settings, transport)
            controller.subscribe(log_state)
            final = await run_feed(controller, settings.max_pages)

    logger.info(
        "feed_finished",
        state=type(final).__name__,
        pages=controller.page_count,
        items=controller.item_count,
    )


if __name__ == "__main__":
    asyncio.run(main())
