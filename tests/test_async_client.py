"""
Tests for the asynchronous Neverstale client.

Author: Neverstale
Date: 2026-10-19
"""

import asyncio
from datetime import datetime

import pytest

from conftest import json_response
from neverstale.client import DECODE_FAILURE, TRANSPORT_FAILURE, ApiException, AsyncClient, Content
from neverstale.client.transport.base import TransportResponse
from neverstale.client.transport.http import AsyncHTTPTransport


class TestAsyncClient:
    """Test AsyncClient operations."""

    def test_default_transport(self):
        client = AsyncClient(api_key="12345", base_uri="https://api.example.com")

        assert isinstance(client.transport, AsyncHTTPTransport)
        assert client.transport.headers["Authorization"] == "Bearer 12345"
        assert client.transport.base_url == "https://api.example.com/"

    @pytest.mark.asyncio
    async def test_health(self, make_async_client):
        client, _ = make_async_client(
            TransportResponse(200, body=b"Success"),
            TransportResponse(503),
            asyncio.TimeoutError(),
        )

        assert await client.health() is True
        assert await client.health() is False
        assert await client.health() is False

    @pytest.mark.asyncio
    async def test_retrieve(self, make_async_client, content_record):
        client, transport = make_async_client(json_response(200, {"data": content_record}))

        content = await client.retrieve("custom-id-provided-by-you")

        assert isinstance(content, Content)
        assert len(content.flags) == 2
        assert transport.requests[0] == ("GET", "content/custom-id-provided-by-you", None)

    @pytest.mark.asyncio
    async def test_ingest(self, make_async_client, content_record):
        client, transport = make_async_client(json_response(200, {
            "status": "success",
            "message": "Content ingested",
            "data": content_record,
        }))

        result = await client.ingest({"custom_id": "x"}, {"webhook": {"endpoint": "https://example.com"}})

        assert isinstance(result.data, Content)
        assert transport.requests[0][2] == {"custom_id": "x", "webhook": {"endpoint": "https://example.com"}}

    @pytest.mark.asyncio
    async def test_batch_delete(self, make_async_client):
        client, _ = make_async_client(json_response(200, {
            "status": "success",
            "message": "Content deleted",
            "deleted_contents": ["c1"],
        }))

        result = await client.batch_delete(["c1"])

        assert result.data == ("c1",)

    @pytest.mark.asyncio
    async def test_flag_operations(self, make_async_client):
        client, transport = make_async_client(
            json_response(200, {"status": "success", "message": "Flag ignored"}),
            json_response(200, {"status": "success", "message": "Flag rescheduled"}),
        )

        ignored = await client.ignore_flag("f1")
        rescheduled = await client.reschedule_flag("f1", datetime(2025, 6, 15))

        assert ignored.message == "Flag ignored"
        assert rescheduled.message == "Flag rescheduled"
        assert transport.requests[1][2] == {"expired_at": "2025-06-15 00:00:00"}

    @pytest.mark.asyncio
    async def test_service_error(self, make_async_client):
        client, _ = make_async_client(json_response(400, {"status": "error", "message": "Bad Request"}))

        with pytest.raises(ApiException) as exc_info:
            await client.retrieve("")

        assert exc_info.value.status == 400
        assert exc_info.value.message == "Bad Request"

    @pytest.mark.asyncio
    async def test_decode_failure(self, make_async_client):
        client, _ = make_async_client(json_response(200, {"data": {"id": "c1"}}))

        with pytest.raises(ApiException) as exc_info:
            await client.retrieve("c1")

        assert exc_info.value.status == DECODE_FAILURE

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_async_client):
        client, _ = make_async_client(ConnectionResetError("reset by peer"))

        with pytest.raises(ApiException) as exc_info:
            await client.ignore_flag("f1")

        assert exc_info.value.status == TRANSPORT_FAILURE
        assert isinstance(exc_info.value.cause, ConnectionResetError)

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, make_async_client):
        client, transport = make_async_client()

        async with client:
            pass

        assert transport.closed
