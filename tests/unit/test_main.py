"""Tests for the demo entry point."""

import logging
from io import StringIO

import pytest
import structlog

from main import build_controller, log_state, run_feed
from uniflow.adapters.memory_transport import InMemoryTransport
from uniflow.core.config import FeedSettings
from uniflow.core.load_state import Failed, Fault, Loaded, Loading, Uninitialized
from uniflow.core.logging import configure_logging
from uniflow.core.page_fetcher import PageToken


class TestRunFeed:
    @pytest.mark.asyncio
    async def test_loads_until_exhausted(self) -> None:
        transport = InMemoryTransport(total=35)
        controller = build_controller(FeedSettings(), transport)

        final = await run_feed(controller)

        assert isinstance(final, Loaded)
        assert len(final.items) == 35
        assert controller.page_count == 4

    @pytest.mark.asyncio
    async def test_stops_at_max_pages(self) -> None:
        transport = InMemoryTransport(total=100)
        controller = build_controller(FeedSettings(page_size=20), transport)

        final = await run_feed(controller, max_pages=2)

        assert isinstance(final, Loaded)
        assert len(final.items) == 40
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_stops_on_failure(self) -> None:
        transport = InMemoryTransport(total=100)
        transport.fail_next(502)
        controller = build_controller(FeedSettings(), transport)

        final = await run_feed(controller)

        assert isinstance(final, Failed)
        assert transport.call_count == 1


class TestLogState:
    def setup_method(self) -> None:
        structlog.reset_defaults()
        configure_logging(development=False, log_level="INFO")

    @pytest.mark.parametrize(
        ("state", "event"),
        [
            (Uninitialized(), "feed_reset"),
            (Loading(items=[], cursor=PageToken(page=0)), "feed_loading"),
            (Loaded(items=[], cursor=None), "feed_loaded"),
            (Failed(Fault("Failed to load data: 500", status=500)), "feed_failed"),
        ],
    )
    def test_logs_one_event_per_variant(self, state, event: str) -> None:
        output = StringIO()
        handler = logging.StreamHandler(output)
        handler.setLevel(logging.INFO)
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)

        try:
            log_state(state)

            handler.flush()
            lines = [line for line in output.getvalue().splitlines() if line]
            assert len(lines) == 1
            assert event in lines[0]
        finally:
            root_logger.removeHandler(handler)

    def test_failed_event_carries_message(self) -> None:
        output = StringIO()
        handler = logging.StreamHandler(output)
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)

        try:
            log_state(Failed(Fault("Failed to load data: 503", status=503)))

            handler.flush()
            assert "Failed to load data: 503" in output.getvalue()
        finally:
            root_logger.removeHandler(handler)
