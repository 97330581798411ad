from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from datetime import datetime, timezone
from typing import Any, Optional


class TaskPriority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class TaskSortField(str, Enum):
    id = "id"
    title = "title"
    description = "description"
    category = "category"
    priority = "priority"
    deadline = "deadline"
    created_at = "createdAt"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


ISO_DATETIME_ERROR = "must be an ISO 8601 date-time string"


def as_utc(value: datetime) -> datetime:
    # naive values are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(value: Any) -> datetime:
    """Strict `YYYY-MM-DDTHH:MM[:SS[.ffffff]][Z|±HH:MM]` parse, returned in UTC.

    Date-only strings and bare numbers (which pydantic would read as Unix
    timestamps) are rejected.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str) or value[10:11] not in ("T", "t"):
        raise ValueError(ISO_DATETIME_ERROR)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(ISO_DATETIME_ERROR) from None
    return as_utc(parsed)


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    priority: TaskPriority
    deadline: datetime

    @field_validator("deadline", mode="before")
    @classmethod
    def deadline_is_iso_string(cls, v: Any) -> datetime:
        return parse_iso_datetime(v)


class Task(TaskCreate):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    created_at: datetime = Field(alias="createdAt")


class TaskFilter(BaseModel):
    """Optional equality/range constraints for listing tasks.

    Unset or blank fields don't filter. Aliases match the `GET /tasks` query names.
    """

    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = None
    priority: Optional[TaskPriority] = None
    deadline_from: Optional[datetime] = Field(default=None, alias="deadlineFrom")
    deadline_to: Optional[datetime] = Field(default=None, alias="deadlineTo")

    @field_validator("category", "priority", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        return v or None

    @field_validator("deadline_from", "deadline_to", mode="before")
    @classmethod
    def bounds_are_iso(cls, v: Any) -> Optional[datetime]:
        if v is None or v == "":
            return None
        return parse_iso_datetime(v)


class TaskSort(BaseModel):
    field: TaskSortField = TaskSortField.created_at
    order: SortOrder = SortOrder.asc
