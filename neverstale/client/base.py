"""
Request building and response decoding shared by the sync and async clients.

Each operation is split into a request builder and a response decoder so that
``Client`` and ``AsyncClient`` only differ in how they wait on the transport.

Author: Neverstale
Date: 2026-10-19
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar
from urllib.parse import quote

from loguru import logger
from pydantic import BaseModel, ValidationError

from neverstale.client.exceptions import (
    DECODE_FAILURE,
    TRANSPORT_FAILURE,
    ApiException,
    ConfigurationError,
)
from neverstale.client.models import Content, TransactionResult
from neverstale.client.transport.base import TransportResponse
from neverstale.config.settings import DEFAULT_BASE_URI
from neverstale.version import __version__

RESCHEDULE_FORMAT = "%Y-%m-%d %H:%M:%S"

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ApiRequest:
    """A request ready to hand to a transport."""
    method: str
    path: str
    json: dict[str, Any] | None = None


class BaseClient:
    """Configuration and helpers common to every Neverstale client."""

    def __init__(self, api_key: str | None, base_uri: str | None = None):
        if not api_key:
            raise ConfigurationError("API key is required")

        self.api_key = api_key
        self.base_uri = base_uri or DEFAULT_BASE_URI

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_uri={self.base_uri!r})"

    @property
    def headers(self) -> dict[str, str]:
        """Headers attached to every request."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"neverstale-python/{__version__}",
        }


# Request builders

def health_request() -> ApiRequest:
    return ApiRequest("GET", "health")


def ingest_request(
    data: Mapping[str, Any],
    callback_config: Mapping[str, Any] | None = None
) -> ApiRequest:
    """Callback configuration keys win over content keys of the same name."""
    return ApiRequest("POST", "ingest", {**data, **(callback_config or {})})


def batch_delete_request(ids: Sequence[str]) -> ApiRequest:
    if isinstance(ids, str):
        raise TypeError("ids must be a sequence of identifiers, not a single string")
    return ApiRequest("DELETE", "content/batch", {"content_ids": list(ids)})


def retrieve_request(content_id: str) -> ApiRequest:
    return ApiRequest("GET", f"content/{_path_segment(content_id)}")


def ignore_flag_request(flag_id: str) -> ApiRequest:
    return ApiRequest("POST", f"flags/{_path_segment(flag_id)}/ignore")


def reschedule_flag_request(flag_id: str, expired_at: datetime) -> ApiRequest:
    return ApiRequest(
        "POST",
        f"flags/{_path_segment(flag_id)}/reschedule",
        {"expired_at": format_timestamp(expired_at)},
    )


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp the way the reschedule endpoint expects.

    The wall-clock time is sent as given; any timezone information on an
    aware datetime is dropped, not converted. Pass UTC datetimes to
    match the timestamps the service returns.
    """
    return value.strftime(RESCHEDULE_FORMAT)


def _path_segment(value: str) -> str:
    # Dot segments would be resolved away when joined onto the base URL
    if value in (".", ".."):
        return value.replace(".", "%2E")
    return quote(value, safe="")


# Response decoding

def wrap_transport_error(error: Exception) -> ApiException:
    """Normalize an unexpected transport exception into an ``ApiException``."""
    return ApiException(TRANSPORT_FAILURE, str(error) or type(error).__name__, cause=error)


def raise_for_status(response: TransportResponse) -> None:
    """
    Raise an ``ApiException`` for non-2xx responses.

    The service's own ``message`` field is preferred for the exception message.
    """
    if response.ok:
        return

    message = None
    try:
        payload = json.loads(response.body)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        message = payload["message"]

    if not message:
        message = f"HTTP {response.status_code}"
        if response.reason:
            message += f" {response.reason}"

    logger.warning(f"Neverstale API returned {response.status_code}: {message}")
    raise ApiException(response.status_code, message, headers=response.headers)


def decode_body(response: TransportResponse) -> dict[str, Any]:
    """Parse a successful response body into a JSON object."""
    try:
        payload = json.loads(response.body)
    except ValueError as e:
        raise ApiException(
            DECODE_FAILURE,
            f"Response body is not valid JSON: {e}",
            headers=response.headers,
            cause=e,
        ) from e

    if not isinstance(payload, dict):
        raise ApiException(
            DECODE_FAILURE,
            f"Expected a JSON object, got {type(payload).__name__}",
            headers=response.headers,
        )

    return payload


def validate(model: type[M], data: Any, response: TransportResponse) -> M:
    """Map decoded JSON onto a model, reporting mismatches as decode failures."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ApiException(
            DECODE_FAILURE,
            f"Invalid {model.__name__} in response: {e}",
            headers=response.headers,
            cause=e,
        ) from e


def _require_data(
    result: TransactionResult,
    expected: type,
    response: TransportResponse
) -> TransactionResult:
    if result.succeeded and not isinstance(result.data, expected):
        raise ApiException(
            DECODE_FAILURE,
            f"Expected {expected.__name__} data in successful response",
            headers=response.headers,
        )
    return result


def decode_ingest(response: TransportResponse) -> TransactionResult:
    body = decode_body(response)
    result = validate(TransactionResult, body, response)
    return _require_data(result, Content, response)


def decode_batch_delete(response: TransportResponse) -> TransactionResult:
    body = decode_body(response)
    # The service reports deleted identifiers under their own key
    data = {**body, "data": body.get("deleted_contents")}
    result = validate(TransactionResult, data, response)
    return _require_data(result, tuple, response)


def decode_content(response: TransportResponse) -> Content:
    body = decode_body(response)
    record = body.get("data")

    if isinstance(record, list):
        record = record[0] if record else None

    if not isinstance(record, dict):
        raise ApiException(
            DECODE_FAILURE,
            "Response does not contain a content record",
            headers=response.headers,
        )

    return validate(Content, record, response)


def decode_transaction(response: TransportResponse) -> TransactionResult:
    body = decode_body(response)
    return validate(TransactionResult, {**body, "data": None}, response)
