"""
Asynchronous Neverstale API client.

Author: Neverstale
Date: 2026-10-19
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from loguru import logger

from neverstale.client.base import (
    ApiRequest,
    BaseClient,
    batch_delete_request,
    decode_batch_delete,
    decode_content,
    decode_ingest,
    decode_transaction,
    health_request,
    ignore_flag_request,
    ingest_request,
    raise_for_status,
    reschedule_flag_request,
    retrieve_request,
    wrap_transport_error,
)
from neverstale.client.exceptions import ApiException
from neverstale.client.models import Content, TransactionResult
from neverstale.client.transport.base import AsyncTransport, TransportResponse
from neverstale.client.transport.http import AsyncHTTPTransport
from neverstale.config.settings import NeverstaleSettings


class AsyncClient(BaseClient):
    """
    Async Neverstale API client.

    Usage:
        async with AsyncClient(api_key="your-api-key") as client:
            content = await client.retrieve("post-42")
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_uri: str | None = None,
        transport: AsyncTransport | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True
    ):
        super().__init__(api_key, base_uri)
        self.transport = transport or AsyncHTTPTransport(
            self.base_uri,
            headers=self.headers,
            timeout=timeout,
            verify_ssl=verify_ssl,
        )

    @classmethod
    def from_settings(cls, settings: NeverstaleSettings, **kwargs: Any) -> "AsyncClient":
        """Build a client from ``NeverstaleSettings``."""
        return cls(
            api_key=settings.api_key,
            base_uri=settings.base_uri,
            timeout=settings.timeout_seconds,
            verify_ssl=settings.verify_ssl,
            **kwargs,
        )

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.close()

    async def _exchange(self, request: ApiRequest) -> TransportResponse:
        logger.debug(f"Neverstale request: {request.method} {request.path}")
        try:
            return await self.transport.send(request.method, request.path, request.json)
        except ApiException:
            raise
        except Exception as e:
            raise wrap_transport_error(e) from e

    async def _send(self, request: ApiRequest) -> TransportResponse:
        response = await self._exchange(request)
        raise_for_status(response)
        return response

    async def health(self) -> bool:
        """Async version of ``Client.health``; never raises."""
        try:
            response = await self._exchange(health_request())
        except ApiException as e:
            logger.warning(f"Neverstale health check failed: {e.message}")
            return False

        return response.status_code == 200

    async def ingest(
        self,
        data: Mapping[str, Any],
        callback_config: Mapping[str, Any] | None = None
    ) -> TransactionResult:
        response = await self._send(ingest_request(data, callback_config))
        return decode_ingest(response)

    async def batch_delete(self, ids: Sequence[str]) -> TransactionResult:
        response = await self._send(batch_delete_request(ids))
        return decode_batch_delete(response)

    async def retrieve(self, content_id: str) -> Content:
        response = await self._send(retrieve_request(content_id))
        return decode_content(response)

    async def ignore_flag(self, flag_id: str) -> TransactionResult:
        response = await self._send(ignore_flag_request(flag_id))
        return decode_transaction(response)

    async def reschedule_flag(self, flag_id: str, expired_at: datetime) -> TransactionResult:
        response = await self._send(reschedule_flag_request(flag_id, expired_at))
        return decode_transaction(response)
