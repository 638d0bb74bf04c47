"""
Neverstale transport layer.

Author: Neverstale
Date: 2026-10-19
"""

from neverstale.client.transport.base import AsyncTransport, Transport, TransportResponse
from neverstale.client.transport.http import AsyncHTTPTransport, HTTPTransport

__all__ = [
    "Transport",
    "AsyncTransport",
    "TransportResponse",
    "HTTPTransport",
    "AsyncHTTPTransport",
]
