"""
Neverstale SDK models for API responses.

Author: Neverstale
Date: 2026-10-19
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _iso_timestamp(value: Any) -> Any:
    # The service sends ISO-8601 strings; numbers would be read as epoch seconds
    if value is None or isinstance(value, (str, datetime)):
        return value
    raise ValueError(f"Expected an ISO-8601 timestamp, got {type(value).__name__}")


class AnalysisStatus(str, Enum):
    """Position of a piece of content in its analysis lifecycle."""
    UNSENT = "unsent"
    PENDING_INITIAL_ANALYSIS = "pending-initial-analysis"
    PENDING_REANALYSIS = "pending-reanalysis"
    PROCESSING_INITIAL_ANALYSIS = "processing-initial-analysis"
    PROCESSING_REANALYSIS = "processing-reanalysis"
    ANALYZED_CLEAN = "analyzed-clean"
    ANALYZED_FLAGGED = "analyzed-flagged"
    ANALYZED_ERROR = "analyzed-error"
    UNKNOWN = "unknown"
    API_ERROR = "api-error"

    @classmethod
    def parse(cls, value: str) -> "AnalysisStatus":
        """
        Parse a status string from the service.

        Raises:
            ValueError: If the value is not a known status
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown analysis status: {value!r}") from None

    @property
    def is_pending(self) -> bool:
        return self in (
            AnalysisStatus.PENDING_INITIAL_ANALYSIS,
            AnalysisStatus.PENDING_REANALYSIS,
        )

    @property
    def is_processing(self) -> bool:
        return self in (
            AnalysisStatus.PROCESSING_INITIAL_ANALYSIS,
            AnalysisStatus.PROCESSING_REANALYSIS,
        )

    @property
    def is_analyzed(self) -> bool:
        """True once an analysis pass has produced a result."""
        return self in (
            AnalysisStatus.ANALYZED_CLEAN,
            AnalysisStatus.ANALYZED_FLAGGED,
            AnalysisStatus.ANALYZED_ERROR,
        )


class TransactionStatus(str, Enum):
    """Outcome of a mutating operation."""
    SUCCESS = "success"
    ERROR = "error"


class Flag(BaseModel):
    """A single issue detected within a piece of content."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    flag: str = Field(description="Short label")
    reason: str = Field(description="Explanation of why the content was flagged")
    snippet: str = Field(description="Excerpt of the content that triggered the flag")
    last_analyzed_at: datetime
    expired_at: datetime | None = None
    ignored_at: datetime | None = None

    @field_validator("last_analyzed_at", "expired_at", "ignored_at", mode="before")
    @classmethod
    def timestamps_are_iso(cls, v: Any) -> Any:
        return _iso_timestamp(v)

    @property
    def is_ignored(self) -> bool:
        return self.ignored_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the flag's expiry date has passed."""
        if self.expired_at is None:
            return False

        expired_at = self.expired_at
        if expired_at.tzinfo is None:
            expired_at = expired_at.replace(tzinfo=timezone.utc)

        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        return expired_at <= now


class Content(BaseModel):
    """A unit of content analyzed by Neverstale."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(description="Identifier assigned by Neverstale")
    custom_id: str = Field(description="Identifier assigned by the caller")
    analyzed_at: datetime | None = None
    expired_at: datetime | None = None
    analysis_status: AnalysisStatus
    flags: tuple[Flag, ...] = ()

    @field_validator("analyzed_at", "expired_at", mode="before")
    @classmethod
    def timestamps_are_iso(cls, v: Any) -> Any:
        return _iso_timestamp(v)

    @field_validator("flags", mode="before")
    @classmethod
    def null_flags_as_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def is_analyzed(self) -> bool:
        return self.analyzed_at is not None

    @property
    def active_flags(self) -> tuple[Flag, ...]:
        """Flags that have not been ignored."""
        return tuple(f for f in self.flags if not f.is_ignored)


class TransactionResult(BaseModel):
    """
    Result of a mutating operation (ingest, delete, ignore, reschedule).

    ``data`` depends on the operation: a ``Content`` for ingest, a tuple of
    deleted identifiers for batch delete, ``None`` for flag operations.
    When ``status`` is ``error`` the data is discarded.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    status: TransactionStatus
    message: str
    data: Content | tuple[str, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_data_on_error(cls, values: Any) -> Any:
        if isinstance(values, dict) and values.get("status") == TransactionStatus.ERROR.value:
            return {**values, "data": None}
        return values

    @property
    def succeeded(self) -> bool:
        return self.status == TransactionStatus.SUCCESS
