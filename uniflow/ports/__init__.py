"""Ports (interfaces) for the application.

This module contains Protocol definitions that define the boundary between
the paging core and the network.
"""

from uniflow.ports.transport import HttpResponse, HttpTransport

__all__ = [
    "HttpResponse",
    "HttpTransport",
]
