"""Storage contract shared by SQLiteTaskRepo and InMemoryTaskRepo."""

from typing import List, Optional, Protocol

from task_api.domain.task_models import Task, TaskCreate, TaskFilter, TaskSort


class TaskRepository(Protocol):
    async def create(self, data: TaskCreate) -> Task: ...
    async def get(self, task_id: int) -> Optional[Task]: ...
    async def list(self, filters: TaskFilter, sort: TaskSort) -> List[Task]: ...
    async def update(self, task_id: int, data: TaskCreate) -> Optional[Task]: ...
    async def delete(self, task_id: int) -> bool: ...
