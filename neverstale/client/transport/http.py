"""
HTTP transports for remote Neverstale API calls.

Author: Neverstale
Date: 2026-10-19
"""

import asyncio
from typing import Any
from urllib.parse import urljoin

import aiohttp
import requests
from loguru import logger

from neverstale.client.exceptions import TRANSPORT_FAILURE, ApiException
from neverstale.client.transport.base import TransportResponse


def _normalize_base_url(base_url: str) -> str:
    # urljoin drops the last path segment unless the base ends with a slash
    return base_url.rstrip("/") + "/"


class HTTPTransport:
    """
    Synchronous transport backed by a ``requests.Session``.

    Every response is returned as-is; only communication failures
    (DNS, refused connections, timeouts) raise.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        session: requests.Session | None = None
    ):
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL of the API (e.g., "https://app.neverstale.io/api/v1/")
            headers: Headers sent with every request
            timeout: Request timeout in seconds
            verify_ssl: Verify SSL certificates
            session: Pre-configured session (a new one is created otherwise)
        """
        self.base_url = _normalize_base_url(base_url)
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session = session or requests.Session()
        self._session.headers.update(headers or {})

    def send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None
    ) -> TransportResponse:
        url = urljoin(self.base_url, path)

        try:
            response = self._session.request(
                method,
                url,
                json=json,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.Timeout as e:
            raise ApiException(
                TRANSPORT_FAILURE,
                f"Request timed out after {self.timeout}s",
                cause=e,
            ) from e
        except requests.RequestException as e:
            raise ApiException(
                TRANSPORT_FAILURE,
                f"HTTP request failed: {e}",
                cause=e,
            ) from e

        logger.debug(f"{method} {url} -> {response.status_code}")

        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content or b"",
            reason=response.reason or "",
        )

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()


class AsyncHTTPTransport:
    """Asynchronous transport backed by an ``aiohttp.ClientSession``."""

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True
    ):
        self.base_url = _normalize_base_url(base_url)
        self.headers = dict(headers or {})
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(ssl=self.verify_ssl),
            )

        return self._session

    async def send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None
    ) -> TransportResponse:
        session = await self._get_session()
        url = urljoin(self.base_url, path)

        try:
            async with session.request(method, url, json=json) as response:
                body = await response.read()
                logger.debug(f"{method} {url} -> {response.status}")
                return TransportResponse(
                    status_code=response.status,
                    headers=dict(response.headers),
                    body=body,
                    reason=response.reason or "",
                )
        except asyncio.TimeoutError as e:
            raise ApiException(
                TRANSPORT_FAILURE,
                f"Request timed out after {self.timeout}s",
                cause=e,
            ) from e
        except aiohttp.ClientError as e:
            raise ApiException(
                TRANSPORT_FAILURE,
                f"HTTP request failed: {e}",
                cause=e,
            ) from e

    async def close(self) -> None:
        """Close the underlying session."""
        if self._session and not self._session.closed:
            await self._session.close()
