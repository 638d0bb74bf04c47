"""
Shared fixtures for Neverstale SDK tests.

Author: Neverstale
Date: 2026-10-19
"""

import json
from collections import deque
from typing import Any

import pytest

from neverstale.client import AsyncClient, Client
from neverstale.client.transport.base import TransportResponse

CONTENT_RECORD = {
    "id": "content-ulid-assigned-by-neverstale",
    "custom_id": "custom-id-provided-by-you",
    "analyzed_at": "2024-11-11T20:51:43.000000Z",
    "expired_at": None,
    "analysis_status": "pending-initial-analysis",
    "flags": [
        {
            "id": "01JCG8FHS9Z2FX7302XB7B3CFW",
            "flag": "outdated security advice",
            "reason": "The section discusses cryptographic hash functions such as MD5 and SHA-1.",
            "snippet": "MD5, SHA-1, or SHA-2 hash digests are sometimes published on websites.",
            "last_analyzed_at": "2024-11-12T13:19:49.000000Z",
            "expired_at": "2025-06-15T00:00:00.000000Z",
            "ignored_at": None,
        },
        {
            "id": "01JCG8FHSRY7XD7J5DMS6353KC",
            "flag": "outdated advice",
            "reason": "SHA-1 has already been proven to be insecure.",
            "snippet": "Collisions against the full SHA-1 algorithm can be produced.",
            "last_analyzed_at": "2024-11-12T13:19:49.000000Z",
            "expired_at": "2025-10-01T00:00:00.000000Z",
            "ignored_at": None,
        },
    ],
}


def json_response(
    status_code: int,
    body: Any,
    headers: dict[str, str] | None = None
) -> TransportResponse:
    """Build a transport response with a JSON body."""
    return TransportResponse(
        status_code=status_code,
        headers=headers or {"Content-Type": "application/json"},
        body=json.dumps(body).encode(),
    )


class FakeTransport:
    """Transport that replays queued responses and records requests."""

    def __init__(self, *responses: TransportResponse | Exception):
        self.responses = deque(responses)
        self.requests: list[tuple[str, str, dict[str, Any] | None]] = []
        self.closed = False

    def send(self, method, path, json=None):
        self.requests.append((method, path, json))
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


class FakeAsyncTransport(FakeTransport):
    """Async flavour of ``FakeTransport``."""

    async def send(self, method, path, json=None):
        return FakeTransport.send(self, method, path, json)

    async def close(self):
        self.closed = True


@pytest.fixture
def content_record():
    """A full content record as returned by the API."""
    return json.loads(json.dumps(CONTENT_RECORD))


@pytest.fixture
def make_client():
    """Factory for a client wired to a ``FakeTransport``."""
    def _make(*responses):
        transport = FakeTransport(*responses)
        client = Client(api_key="12345", base_uri="https://api.example.com", transport=transport)
        return client, transport

    return _make


@pytest.fixture
def make_async_client():
    """Factory for an async client wired to a ``FakeAsyncTransport``."""
    def _make(*responses):
        transport = FakeAsyncTransport(*responses)
        client = AsyncClient(api_key="12345", base_uri="https://api.example.com", transport=transport)
        return client, transport

    return _make
