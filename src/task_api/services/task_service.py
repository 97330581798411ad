import logging
from typing import List

from task_api.domain.errors import NotFoundError, ValidationError
from task_api.domain.task_models import Task, TaskCreate, TaskFilter, TaskSort
from task_api.domain.task_repository import TaskRepository

logger = logging.getLogger("taskapi.tasks")


class TaskService:
    def __init__(self, repo: TaskRepository):
        self.repo = repo

    async def create_task(self, data: TaskCreate) -> Task:
        task = await self.repo.create(data)
        logger.info("task.create", extra={"category": "tasks", "event": "task.create", "task_id": task.id, "title": task.title})
        return task

    async def get_task(self, task_id: int) -> Task:
        task = await self.repo.get(task_id)
        if task is None:
            raise NotFoundError()
        return task

    async def list_tasks(self, filters: TaskFilter, sort: TaskSort) -> List[Task]:
        if filters.deadline_from and filters.deadline_to and filters.deadline_from > filters.deadline_to:
            raise ValidationError("deadlineFrom must not be after deadlineTo")
        return await self.repo.list(filters, sort)

    async def update_task(self, task_id: int, data: TaskCreate) -> Task:
        task = await self.repo.update(task_id, data)
        if task is None:
            raise NotFoundError()
        logger.info("task.update", extra={"category": "tasks", "event": "task.update", "task_id": task_id})
        return task

    async def delete_task(self, task_id: int) -> None:
        if not await self.repo.delete(task_id):
            raise NotFoundError()
        logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id})
