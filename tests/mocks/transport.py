"""Mock implementations of the HttpTransport protocol for testing.

Features:
- Scripted responses (or exceptions) returned in order
- Call tracking for assertions (call_count, requested_urls)
- Optional gate to hold a request in flight until the test releases it
"""

import asyncio
import json
from typing import Any

from uniflow.ports.transport import HttpResponse


def make_post_records(start: int, count: int, user_id: int = 1) -> list[dict[str, Any]]:
    """Wire records for posts ``start + 1`` through ``start + count``."""
    return [
        {
            "id": n,
            "title": f"Post {n}",
            "body": f"Content of Post {n}",
            "userId": user_id,
        }
        for n in range(start + 1, start + count + 1)
    ]


def page_response(
    records: list[Any], total: int | None = None, status: int = 200
) -> HttpResponse:
    """Build a response carrying ``records`` and an ``x-total-count`` header."""
    headers = {} if total is None else {"x-total-count": str(total)}
    return HttpResponse(
        status=status, body=json.dumps(records).encode("utf-8"), headers=headers
    )


class ScriptedTransport:
    """Returns scripted responses in order.

    Each script entry is either an ``HttpResponse`` to return or an exception
    to raise. The last entry repeats once the script is exhausted.

    Attributes:
        requested_urls: URLs passed to ``get``, in order.
        gate: When set to an unset ``asyncio.Event``, each request waits on it
            before answering. Use ``hold()`` / ``release()``.

    Example:
        >>> transport = ScriptedTransport([page_response(make_post_records(0, 10), 100)])
        >>> response = await transport.get("https://api.test/posts?_start=0&_limit=10")
        >>> assert transport.call_count == 1
    """

    def __init__(self, script: list[HttpResponse | Exception]) -> None:
        self.script = list(script)
        self.requested_urls: list[str] = []
        self.gate: asyncio.Event | None = None
        self.in_flight = 0

    @property
    def call_count(self) -> int:
        return len(self.requested_urls)

    def hold(self) -> None:
        """Make subsequent requests wait until ``release()``."""
        self.gate = asyncio.Event()

    def release(self) -> None:
        if self.gate is not None:
            self.gate.set()

    async def get(self, url: str) -> HttpResponse:
        self.requested_urls.append(url)
        idx = min(self.call_count - 1, len(self.script) - 1)
        entry = self.script[idx]

        self.in_flight += 1
        try:
            if self.gate is not None:
                await self.gate.wait()
        finally:
            self.in_flight -= 1

        if isinstance(entry, Exception):
            raise entry
        return entry
