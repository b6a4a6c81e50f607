"""Common schemas shared by every endpoint: pagination, filters and envelopes."""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for wire DTOs: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Error vocabulary ─────────────────────────────────────────

class ServerErrorCode(str, Enum):
    OK = "OK"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    TEACHER_NOT_FOUND = "TEACHER_NOT_FOUND"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    DELETE_STUDENT_NOT_ALLOWED = "DELETE_STUDENT_NOT_ALLOWED"
    DELETE_TEACHER_NOT_ALLOWED = "DELETE_TEACHER_NOT_ALLOWED"
    DELETE_COURSE_NOT_ALLOWED = "DELETE_COURSE_NOT_ALLOWED"
    STUDENT_MISSING = "STUDENT_MISSING"
    TEACHER_MISSING = "TEACHER_MISSING"
    COURSE_MISSING = "COURSE_MISSING"
    FILTER_MISSING = "FILTER_MISSING"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorSeverity(str, Enum):
    OK = "OK"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    FATAL = "FATAL"

    @property
    def is_failure(self) -> bool:
        return self in (ErrorSeverity.ERROR, ErrorSeverity.FATAL)


# ── Requests ─────────────────────────────────────────────────

class Pagination(CamelModel):
    page_number: int = Field(0, ge=0)
    page_size: int = Field(20, gt=0)


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class Sorting(CamelModel):
    field: str
    direction: SortDirection = SortDirection.ASC


class SimpleStringFilter(CamelModel):
    """Body of every ``{entity}/filter`` call.

    The free-text search travels as ``filter`` on the wire.
    """
    filter: str | None = None
    pagination: Pagination = Field(default_factory=Pagination)
    sorting: Sorting | None = None


class LongId(CamelModel):
    id: int


# ── Responses ────────────────────────────────────────────────

class ServerStatus(CamelModel):
    code: str | int | None = None
    message: str | None = None
    severity: ErrorSeverity | None = None
    action: str | None = None
    trace_id: str | None = None


class ErrorContext(CamelModel):
    code: str | None = None
    message: str | None = None
    severity: ErrorSeverity | None = None


class ResponseWithStatus(CamelModel):
    """Status/error channel shared by every envelope.

    A call succeeded only when ``error`` is absent and no ``status`` entry
    carries ERROR or FATAL severity, whatever the HTTP status was.
    """
    status: list[ServerStatus] = Field(default_factory=list)
    error: ErrorContext | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status_as_list(cls, value: Any) -> Any:
        # Some backends send a single status object instead of a list
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value

    def failure(self) -> ErrorContext | ServerStatus | None:
        """Return the entry that makes this envelope a failure, or None."""
        if self.error is not None:
            return self.error
        for entry in self.status:
            if entry.severity is not None and entry.severity.is_failure:
                return entry
        return None

    @property
    def is_success(self) -> bool:
        return self.failure() is None


class RespSingle(ResponseWithStatus, Generic[T]):
    data: T | None = None


class Slice(CamelModel, Generic[T]):
    content: list[T] = Field(default_factory=list)
    has_next: bool = False
    pageable: Any = None


class RespSlice(ResponseWithStatus, Generic[T]):
    slice: Slice[T] | None = None

    @property
    def content(self) -> list[T]:
        return self.slice.content if self.slice is not None else []

    @property
    def has_next(self) -> bool:
        return self.slice.has_next if self.slice is not None else False
