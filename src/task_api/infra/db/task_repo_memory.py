from __future__ import annotations
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from itertools import count

from task_api.domain.task_models import (
    Task, TaskCreate, TaskFilter, TaskPriority, TaskSort, TaskSortField, SortOrder,
)


class InMemoryTaskRepo:
    """
    Dict-backed store with the same semantics as SQLiteTaskRepo.
    Ids come from a monotonic counter, so a deleted id is never handed out again.
    Null values sort first on ascending order, like SQLite.
    """
    def __init__(self):
        self._tasks: Dict[int, Task] = {}
        self._ids = count(1)

    async def create(self, data: TaskCreate) -> Task:
        task = Task(
            id=next(self._ids),
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        self._tasks[task.id] = task
        return task

    async def get(self, task_id: int) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def list(self, filters: TaskFilter, sort: TaskSort) -> List[Task]:
        tasks = [t for t in self._tasks.values() if _matches(t, filters)]
        tasks.sort(key=lambda t: t.id)
        # sort is stable (also with reverse=True), so ties stay in id order
        tasks.sort(key=lambda t: _sort_key(t, sort.field), reverse=sort.order == SortOrder.desc)
        return tasks

    async def update(self, task_id: int, data: TaskCreate) -> Optional[Task]:
        current = self._tasks.get(task_id)
        if current is None:
            return None
        task = Task(id=current.id, created_at=current.created_at, **data.model_dump())
        self._tasks[task_id] = task
        return task

    async def delete(self, task_id: int) -> bool:
        return self._tasks.pop(task_id, None) is not None


def _matches(task: Task, filters: TaskFilter) -> bool:
    if filters.category and task.category != filters.category:
        return False
    if filters.priority and task.priority != filters.priority:
        return False
    if filters.deadline_from and task.deadline < filters.deadline_from:
        return False
    if filters.deadline_to and task.deadline > filters.deadline_to:
        return False
    return True


def _sort_key(task: Task, field: TaskSortField) -> tuple[bool, Any]:
    attr = "created_at" if field == TaskSortField.created_at else field.value
    value = getattr(task, attr)
    if isinstance(value, TaskPriority):
        value = value.value
    return (value is not None, value if value is not None else 0)
