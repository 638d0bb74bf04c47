"""
Transport protocols for Neverstale SDK.

A transport sends one request and hands back the raw response, whatever its
status code. Communication failures are raised as ``ApiException`` with the
``TRANSPORT_FAILURE`` status.

Author: Neverstale
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP response handed back by a transport."""
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    """Protocol for the synchronous transport between SDK and API."""

    def send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None
    ) -> TransportResponse:
        """
        Send a request and return the response.

        Args:
            method: HTTP method
            path: Path relative to the API base address (e.g. "content/batch")
            json: JSON request body

        Returns:
            The response, including non-2xx ones

        Raises:
            ApiException: If no response was received
        """
        ...

    def close(self) -> None:
        """Close transport and cleanup resources."""
        ...


class AsyncTransport(Protocol):
    """Protocol for the asynchronous transport between SDK and API."""

    async def send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None
    ) -> TransportResponse:
        """Async counterpart of ``Transport.send``."""
        ...

    async def close(self) -> None:
        """Close transport and cleanup resources."""
        ...
