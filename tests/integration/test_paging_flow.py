"""Integration tests for the full paging flow.

Drives a controller over the in-memory posts endpoint the way a scrolling
list would: first page on startup, more pages as the user reaches the end,
refresh on demand.
"""

import pytest

from uniflow.adapters.memory_transport import InMemoryTransport
from uniflow.core.load_state import Failed, Loaded, Loading, Uninitialized
from uniflow.core.page_fetcher import PageFetcher, PageToken
from uniflow.core.pagination import PaginationController
from uniflow.core.posts import Post


def build(transport: InMemoryTransport, page_size: int = 10) -> PaginationController[Post]:
    return PaginationController(
        PageFetcher(transport, "https://jsonplaceholder.test", page_size=page_size)
    )


@pytest.mark.asyncio
async def test_scroll_through_whole_collection() -> None:
    transport = InMemoryTransport(total=100, latency=0.001)
    controller = build(transport)
    published = []
    controller.subscribe(published.append)

    await controller.reset()
    titles = [p.title for p in controller.state.items]
    assert titles[0] == "Post 1"
    assert "Post 11" not in titles

    while controller.has_more:
        await controller.load_next_page()

    state = controller.state
    assert isinstance(state, Loaded)
    assert [p.id for p in state.items] == list(range(1, 101))
    assert controller.page_count == 10
    assert controller.item_count == 100
    assert transport.call_count == 10

    # One reset, then Loading/Loaded for each of the 10 pages
    assert isinstance(published[0], Uninitialized)
    assert len(published) == 1 + 2 * 10
    assert all(isinstance(s, Loading) for s in published[1::2])
    assert all(isinstance(s, Loaded) for s in published[2::2])
    assert [s.cursor for s in published[1::2]] == [PageToken(page=n) for n in range(10)]


@pytest.mark.asyncio
async def test_failure_then_refresh_recovers() -> None:
    transport = InMemoryTransport(total=30)
    controller = build(transport)

    await controller.reset()
    transport.fail_next(500)
    await controller.load_next_page()

    assert isinstance(controller.state, Failed)
    assert "500" in controller.state.error.message
    assert controller.page_count == 2

    await controller.reset()
    await controller.load_next_page()
    await controller.load_next_page()

    assert controller.state == Loaded(
        items=[Post(id=n, title=f"Post {n}", body=f"Content of Post {n}", user_id=1)
               for n in range(1, 31)],
        cursor=None,
    )
    assert controller.page_count == 3


@pytest.mark.asyncio
async def test_custom_page_size() -> None:
    transport = InMemoryTransport(total=7)
    controller = build(transport, page_size=3)

    await controller.reset()
    while controller.has_more:
        await controller.load_next_page()

    assert [p.id for p in controller.state.items] == list(range(1, 8))
    assert transport.requested_urls[-1].endswith("_start=6&_limit=3")
    assert controller.page_count == 3
