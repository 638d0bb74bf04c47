"""
Neverstale Client SDK.

Example Usage:
    ```python
    from neverstale import Client

    client = Client(api_key="ns_...")

    if client.health():
        result = client.ingest({"custom_id": "post-42", "data": "..."})
        content = client.retrieve("post-42")

        for flag in content.active_flags:
            print(f"{flag.flag}: {flag.reason}")
    ```

Author: Neverstale
Date: 2026-10-19
"""

from neverstale.client.async_client import AsyncClient
from neverstale.client.client import Client
from neverstale.client.exceptions import (
    DECODE_FAILURE,
    TRANSPORT_FAILURE,
    ApiException,
    ConfigurationError,
    NeverstaleError,
)
from neverstale.client.models import (
    AnalysisStatus,
    Content,
    Flag,
    TransactionResult,
    TransactionStatus,
)

__all__ = [
    # Clients
    "Client",
    "AsyncClient",
    # Exceptions
    "NeverstaleError",
    "ConfigurationError",
    "ApiException",
    "TRANSPORT_FAILURE",
    "DECODE_FAILURE",
    # Models
    "AnalysisStatus",
    "TransactionStatus",
    "Flag",
    "Content",
    "TransactionResult",
]
