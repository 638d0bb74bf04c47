"""
Synchronous Neverstale API client.

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
from neverstale.client.transport.base import Transport, TransportResponse
from neverstale.client.transport.http import HTTPTransport
from neverstale.config.settings import NeverstaleSettings


class Client(BaseClient):
    """
    Neverstale API client.

    Every method performs exactly one request. Failures are raised as
    ``ApiException``; nothing is retried.

    Usage:
        client = Client(api_key="your-api-key")

        result = client.ingest(
            {"custom_id": "post-42", "title": "Hello", "data": "..."},
            {"webhook": {"endpoint": "https://example.com/hooks/neverstale"}},
        )
        content = client.retrieve("post-42")
        for flag in content.flags:
            print(flag.flag, flag.reason)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_uri: str | None = None,
        transport: Transport | None = None,
        timeout: float = 30.0,
        verify_ssl: bool = True
    ):
        """
        Initialize Neverstale client.

        Args:
            api_key: API key for authentication
            base_uri: Base URL of the API (defaults to the production service)
            transport: Transport to send requests with (an ``HTTPTransport`` otherwise)
            timeout: Request timeout in seconds, used by the default transport
            verify_ssl: Verify SSL certificates, used by the default transport
        """
        super().__init__(api_key, base_uri)
        self.transport = transport or HTTPTransport(
            self.base_uri,
            headers=self.headers,
            timeout=timeout,
            verify_ssl=verify_ssl,
        )

    @classmethod
    def from_settings(cls, settings: NeverstaleSettings, **kwargs: Any) -> "Client":
        """Build a client from ``NeverstaleSettings``."""
        return cls(
            api_key=settings.api_key,
            base_uri=settings.base_uri,
            timeout=settings.timeout_seconds,
            verify_ssl=settings.verify_ssl,
            **kwargs,
        )

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport."""
        self.transport.close()

    def _exchange(self, request: ApiRequest) -> TransportResponse:
        logger.debug(f"Neverstale request: {request.method} {request.path}")
        try:
            return self.transport.send(request.method, request.path, request.json)
        except ApiException:
            raise
        except Exception as e:
            raise wrap_transport_error(e) from e

    def _send(self, request: ApiRequest) -> TransportResponse:
        response = self._exchange(request)
        raise_for_status(response)
        return response

    def health(self) -> bool:
        """
        Ping the API to check it is available and the API key is valid.

        Never raises: any failure is reported as ``False``.
        """
        try:
            response = self._exchange(health_request())
        except ApiException as e:
            logger.warning(f"Neverstale health check failed: {e.message}")
            return False

        return response.status_code == 200

    def ingest(
        self,
        data: Mapping[str, Any],
        callback_config: Mapping[str, Any] | None = None
    ) -> TransactionResult:
        """
        Submit content for analysis.

        Args:
            data: Content payload (custom_id, title, data, ...)
            callback_config: Webhook configuration merged into the request body

        Returns:
            TransactionResult whose data is the ingested ``Content``
        """
        response = self._send(ingest_request(data, callback_config))
        return decode_ingest(response)

    def batch_delete(self, ids: Sequence[str]) -> TransactionResult:
        """
        Delete content by content ID or custom ID.

        The batch succeeds or fails as a whole.

        Returns:
            TransactionResult whose data is the tuple of deleted identifiers
        """
        response = self._send(batch_delete_request(ids))
        return decode_batch_delete(response)

    def retrieve(self, content_id: str) -> Content:
        """Retrieve content by content ID or custom ID."""
        response = self._send(retrieve_request(content_id))
        return decode_content(response)

    def ignore_flag(self, flag_id: str) -> TransactionResult:
        """Ignore a flag."""
        response = self._send(ignore_flag_request(flag_id))
        return decode_transaction(response)

    def reschedule_flag(self, flag_id: str, expired_at: datetime) -> TransactionResult:
        """Move a flag's expiry date. The wall-clock time of ``expired_at`` is sent as-is."""
        response = self._send(reschedule_flag_request(flag_id, expired_at))
        return decode_transaction(response)
