from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from task_api.domain.task_models import Task, TaskCreate, TaskFilter, TaskSort, TaskSortField, SortOrder
from task_api.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

# SQLite INTEGER is a signed 64-bit value
MAX_TASK_ID = 2**63 - 1

TaskId = Annotated[int, Path(ge=1, le=MAX_TASK_ID)]


def get_service(request: Request) -> TaskService:
    # Wired by create_app()
    svc = getattr(request.app.state, "task_service", None)
    if svc is None:
        raise RuntimeError("TaskService not wired")
    return svc


@router.post("", response_model=Task)
async def create_task(payload: TaskCreate, svc: TaskService = Depends(get_service)):
    return await svc.create_task(payload)


@router.get("", response_model=list[Task])
async def list_tasks(
    category: Optional[str] = None,
    priority: Optional[str] = None,
    deadline_from: Optional[str] = Query(None, alias="deadlineFrom"),
    deadline_to: Optional[str] = Query(None, alias="deadlineTo"),
    sort_by: TaskSortField = Query(TaskSortField.created_at, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.asc, alias="sortOrder"),
    svc: TaskService = Depends(get_service),
):
    # Filters arrive as raw strings so blank values can mean "unset"
    try:
        filters = TaskFilter.model_validate({
            "category": category,
            "priority": priority,
            "deadlineFrom": deadline_from,
            "deadlineTo": deadline_to,
        })
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors()) from e
    return await svc.list_tasks(filters, TaskSort(field=sort_by, order=sort_order))


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: TaskId, svc: TaskService = Depends(get_service)):
    return await svc.get_task(task_id)


@router.put("/{task_id}", response_model=Task)
async def update_task(payload: TaskCreate, task_id: TaskId, svc: TaskService = Depends(get_service)):
    return await svc.update_task(task_id, payload)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_task(task_id: TaskId, svc: TaskService = Depends(get_service)):
    await svc.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
