import uuid
from datetime import date, datetime
from typing import Annotated

from pydantic import StringConstraints, computed_field, field_validator

from taskboard.models import TaskStatus
from taskboard.schemas.base import APIModel, UTCDateTime
from taskboard.services.stats import is_overdue
from taskboard.timeutils import to_utc


TaskTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
TaskDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]

DUE_DATE_ERROR = "Valid due date is required"


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def _parse_due_date(value):
    """
    Accept an ISO-8601 string or a date/datetime.

    A bare calendar date ("2020-01-01") means midnight UTC. Numbers are
    rejected rather than read as epoch offsets.
    """
    if isinstance(value, str):
        if len(value.strip()) == 10:
            try:
                parsed = date.fromisoformat(value.strip())
            except ValueError:
                raise ValueError(DUE_DATE_ERROR) from None
            return datetime(parsed.year, parsed.month, parsed.day)
        if _is_number(value):
            raise ValueError(DUE_DATE_ERROR)
        return value
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValueError(DUE_DATE_ERROR)


def _normalize_due_date(value: datetime) -> datetime:
    try:
        return to_utc(value)
    except OverflowError:
        # Valid ISO instant whose UTC equivalent leaves years 1..9999
        raise ValueError(DUE_DATE_ERROR) from None


class TaskCreate(APIModel):
    """Schema for creating a new task."""
    title: TaskTitle
    description: TaskDescription | None = None
    due_date: datetime
    status: TaskStatus = TaskStatus.TODO

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value):
        return _parse_due_date(value)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime) -> datetime:
        return _normalize_due_date(value)


class TaskUpdate(APIModel):
    """Schema for updating a task. Any subset of fields may be sent."""
    title: TaskTitle | None = None
    description: TaskDescription | None = None
    due_date: datetime | None = None
    status: TaskStatus | None = None

    @field_validator("title", "due_date", "status", mode="before")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if info.field_name == "due_date":
            return _parse_due_date(value)
        return value

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return _normalize_due_date(value) if value is not None else None


class TaskRead(APIModel):
    """Schema for reading a task with the derived overdue flag."""
    id: uuid.UUID
    title: str
    description: str
    due_date: UTCDateTime
    status: TaskStatus
    project_id: uuid.UUID
    created_by: uuid.UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime

    @computed_field(alias="isOverdue")
    @property
    def is_overdue(self) -> bool:
        """Past due and not Done, evaluated at serialization time."""
        return is_overdue(self.due_date, self.status)


class OverdueTaskRead(TaskRead):
    """Overdue task annotated with the name of its project."""
    project_name: str
