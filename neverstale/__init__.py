"""
Neverstale - Python client for the Neverstale content analysis API.

Author: Neverstale
Date: 2026-10-19
"""

from loguru import logger

from neverstale.client import (
    DECODE_FAILURE,
    TRANSPORT_FAILURE,
    AnalysisStatus,
    ApiException,
    AsyncClient,
    Client,
    ConfigurationError,
    Content,
    Flag,
    NeverstaleError,
    TransactionResult,
    TransactionStatus,
)
from neverstale.config import NeverstaleSettings, get_settings
from neverstale.version import __version__

# Library logging stays off until the application enables it
logger.disable("neverstale")

__all__ = [
    "__version__",
    "Client",
    "AsyncClient",
    "NeverstaleError",
    "ConfigurationError",
    "ApiException",
    "TRANSPORT_FAILURE",
    "DECODE_FAILURE",
    "AnalysisStatus",
    "TransactionStatus",
    "Flag",
    "Content",
    "TransactionResult",
    "NeverstaleSettings",
    "get_settings",
]
