"""Transport implementations.

This module contains concrete implementations of the HttpTransport protocol
defined in uniflow/ports/transport.py.
"""

from uniflow.providers.aiohttp_transport import AiohttpTransport

__all__ = [
    "AiohttpTransport",
]
