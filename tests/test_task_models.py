from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from task_api.domain.task_models import Task, TaskCreate, TaskFilter, TaskPriority


def test_priority_accepts_the_three_levels():
    for level in ("Low", "Medium", "High"):
        assert TaskCreate(title="t", priority=level, deadline="2025-01-01T00:00:00Z").priority == TaskPriority(level)


def test_priority_is_case_sensitive():
    with pytest.raises(ValidationError):
        TaskCreate(title="t", priority="high", deadline="2025-01-01T00:00:00Z")


def test_deadline_without_offset_is_read_as_utc():
    data = TaskCreate(title="t", priority="Low", deadline="2025-01-01T10:30:00")
    assert data.deadline == datetime(2025, 1, 1, 10, 30, tzinfo=timezone.utc)


def test_deadline_with_offset_is_converted_to_utc():
    data = TaskCreate(title="t", priority="Low", deadline="2025-01-01T10:30:00+02:00")
    assert data.deadline.utcoffset().total_seconds() == 0
    assert data.deadline.hour == 8


def test_deadline_is_required():
    with pytest.raises(ValidationError):
        TaskCreate(title="t", priority="Low")


def test_unknown_fields_are_ignored():
    data = TaskCreate(title="t", priority="Low", deadline="2025-01-01T00:00:00Z", owner="me")
    assert not hasattr(data, "owner")


def test_task_serializes_created_at_as_camel_case():
    task = Task(
        id=1,
        title="t",
        priority=TaskPriority.low,
        deadline=datetime(2025, 1, 1, tzinfo=timezone.utc),
        created_at=datetime(2024, 12, 1, tzinfo=timezone.utc),
    )
    dumped = task.model_dump(by_alias=True, mode="json")
    assert "createdAt" in dumped
    assert dumped["priority"] == "Low"


@pytest.mark.parametrize("deadline", ["2025-01-01", "1735689600", "2025-13-01T00:00:00Z", "01/01/2025 00:00"])
def test_deadline_must_be_a_full_iso_date_time(deadline):
    with pytest.raises(ValidationError):
        TaskCreate(title="t", priority="Low", deadline=deadline)


def test_filter_treats_blank_values_as_unset():
    filters = TaskFilter.model_validate({"category": "", "priority": "", "deadlineFrom": "", "deadlineTo": ""})
    assert filters == TaskFilter()


def test_filter_reads_query_aliases():
    filters = TaskFilter.model_validate({"priority": "High", "deadlineFrom": "2025-01-01T02:00:00+02:00"})
    assert filters.priority is TaskPriority.high
    assert filters.deadline_from == datetime(2025, 1, 1, tzinfo=timezone.utc)
