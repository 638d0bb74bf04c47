"""
Neverstale SDK exceptions.

Every failure of an API operation reaches the caller as an ``ApiException``.
The ``status`` attribute tells the three failure kinds apart:

- an HTTP status code when the service answered with a non-2xx response
- ``TRANSPORT_FAILURE`` when no response was received at all
- ``DECODE_FAILURE`` when a 2xx response could not be decoded

Author: Neverstale
Date: 2026-10-19
"""

from collections.abc import Mapping

from requests.structures import CaseInsensitiveDict

TRANSPORT_FAILURE = 0
DECODE_FAILURE = -1


class NeverstaleError(Exception):
    """Base exception for all Neverstale SDK errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(NeverstaleError):
    """Raised when the SDK is misconfigured (e.g. no API key)."""
    pass


class ApiException(NeverstaleError):
    """Raised when an API operation fails."""

    def __init__(
        self,
        status: int,
        message: str,
        headers: Mapping[str, str] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.headers = CaseInsensitiveDict(headers or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"ApiException(status={self.status}, message={self.message!r})"

    @property
    def is_transport_failure(self) -> bool:
        """True when no HTTP response was received."""
        return self.status == TRANSPORT_FAILURE

    @property
    def is_decode_failure(self) -> bool:
        """True when the service answered 2xx but the body was not understood."""
        return self.status == DECODE_FAILURE

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status < 600

    @property
    def retry_after(self) -> int | None:
        """Seconds from the ``Retry-After`` header, when the service sent one."""
        value = self.headers.get("Retry-After")
        if value is None or not value.strip().isdigit():
            return None
        return int(value)
