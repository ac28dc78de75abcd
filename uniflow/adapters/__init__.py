"""Adapters for running without external services."""

from uniflow.adapters.memory_transport import InMemoryTransport

__all__ = [
    "InMemoryTransport",
]
