"""Mock implementations for testing."""

from tests.mocks.transport import ScriptedTransport, make_post_records, page_response

__all__ = ["ScriptedTransport", "make_post_records", "page_response"]
