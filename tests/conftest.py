"""Shared pytest fixtures for uniflow tests."""

import pytest

from tests.mocks.transport import ScriptedTransport, make_post_records, page_response
from uniflow.adapters.memory_transport import InMemoryTransport
from uniflow.core.page_fetcher import PageFetcher
from uniflow.core.pagination import PaginationController
from uniflow.core.posts import Post

BASE_URL = "https://api.test"


@pytest.fixture
def memory_transport() -> InMemoryTransport:
    """Provide an in-memory posts endpoint with 100 posts."""
    return InMemoryTransport(total=100)


@pytest.fixture
def paged_transport() -> ScriptedTransport:
    """Provide a scripted transport serving pages 0, 1 and 2 of 100 posts.

    Returns:
        ScriptedTransport: Answers the first three requests with posts 1-10,
            11-20 and 21-30, each with ``x-total-count: 100``.
    """
    return ScriptedTransport(
        [page_response(make_post_records(start, 10), total=100) for start in (0, 10, 20)]
    )


@pytest.fixture
def make_controller():
    """Factory building a controller over any transport.

    Example:
        def test_something(make_controller, paged_transport):
            controller = make_controller(paged_transport)
    """

    def factory(transport, page_size: int = 10) -> PaginationController[Post]:
        return PaginationController(PageFetcher(transport, BASE_URL, page_size=page_size))

    return factory
