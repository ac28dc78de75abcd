"""In-memory implementation of the HttpTransport protocol.

Simulates the JSONPlaceholder ``/posts`` endpoint: a fixed number of posts,
paged with ``_start``/``_limit`` and counted in ``x-total-count``. Useful for
tests and for running the demo without network access.
"""

import asyncio
import json
from urllib.parse import parse_qs, urlsplit

from uniflow.ports.transport import HttpResponse


class InMemoryTransport:
    """Serves generated posts from memory.

    Post ``n`` (1-based) has ``id=n``, ``title="Post n"`` and
    ``body="Content of Post n"``.

    Example:
        transport = InMemoryTransport(total=25, latency=0.1)
        transport.fail_next(503)
        response = await transport.get(".../posts?_start=0&_limit=10")  # 503
        response = await transport.get(".../posts?_start=0&_limit=10")  # 200

    Attributes:
        total: Number of posts in the collection.
        latency: Seconds to wait before each response.
        requested_urls: Every URL passed to ``get``, in order.
    """

    def __init__(self, total: int = 100, latency: float = 0.0, user_id: int = 1) -> None:
        """Initialize the transport.

        Args:
            total: Number of posts in the collection. Defaults to 100.
            latency: Artificial delay per request in seconds. Defaults to 0.
            user_id: ``userId`` of every generated post. Defaults to 1.
        """
        self.total = total
        self.latency = latency
        self.user_id = user_id
        self.requested_urls: list[str] = []
        self._pending_failures: list[int] = []

    @property
    def call_count(self) -> int:
        return len(self.requested_urls)

    def fail_next(self, status: int = 500) -> None:
        """Answer the next request with ``status`` and an error body."""
        self._pending_failures.append(status)

    async def get(self, url: str) -> HttpResponse:
        self.requested_urls.append(url)
        if self.latency:
            await asyncio.sleep(self.latency)

        if self._pending_failures:
            status = self._pending_failures.pop(0)
            return HttpResponse(status=status, body=b'{"error": "simulated"}')

        query = parse_qs(urlsplit(url).query)
        try:
            start = int(query.get("_start", ["0"])[0])
            limit = int(query.get("_limit", [str(self.total)])[0])
        except ValueError:
            return HttpResponse(status=400, body=b'{"error": "bad query"}')

        end = min(start + limit, self.total)
        posts = [
            {
                "id": n,
                "title": f"Post {n}",
                "body": f"Content of Post {n}",
                "userId": self.user_id,
            }
            for n in range(start + 1, end + 1)
        ]
        return HttpResponse(
            status=200,
            body=json.dumps(posts).encode("utf-8"),
            headers={"X-Total-Count": str(self.total), "Content-Type": "application/json"},
        )
