"""Routes handling task CRUD operations for the authenticated user."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from ...deps import AuthHeaderDependency, RawBodyDependency, TaskIdDependency, ToDoServiceDependency
from ...models import TaskEntity
from ...schemas import TaskCreated, TaskPayload, TaskRead

router = APIRouter(prefix="/task", tags=["tasks"])

# The body is read raw and decoded by the service, so describe it by hand.
_TASK_BODY_DOC: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TaskPayload.model_json_schema()}},
    }
}


def _map_task(task: TaskEntity) -> TaskRead:
    return TaskRead.model_validate(task)


@router.post(
    "",
    response_model=TaskCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    openapi_extra=_TASK_BODY_DOC,
)
@router.post("/", include_in_schema=False, status_code=status.HTTP_201_CREATED)
def create_task(
    service: ToDoServiceDependency,
    auth_header: AuthHeaderDependency,
    body: RawBodyDependency,
) -> TaskCreated:
    task_id = service.submit_task(auth_header, body)
    return TaskCreated(id=task_id)


@router.get(
    "",
    response_model=list[TaskRead],
    response_model_exclude_none=True,
    summary="List the caller's tasks",
)
@router.get("/", include_in_schema=False, response_model_exclude_none=True)
def list_tasks(
    service: ToDoServiceDependency,
    auth_header: AuthHeaderDependency,
) -> list[TaskRead]:
    return [_map_task(task) for task in service.list_owned_tasks(auth_header)]


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    response_model_exclude_none=True,
    summary="Retrieve a task by id",
)
def get_task(
    task_id: TaskIdDependency,
    service: ToDoServiceDependency,
    auth_header: AuthHeaderDependency,
) -> TaskRead:
    return _map_task(service.fetch_task(auth_header, task_id))


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    response_model_exclude_none=True,
    summary="Replace an existing task",
    openapi_extra=_TASK_BODY_DOC,
)
def update_task(
    task_id: TaskIdDependency,
    service: ToDoServiceDependency,
    auth_header: AuthHeaderDependency,
    body: RawBodyDependency,
) -> TaskRead:
    return _map_task(service.replace_task(auth_header, task_id, body))


@router.delete(
    "/{task_id}",
    response_class=PlainTextResponse,
    summary="Delete a task",
)
def delete_task(
    task_id: TaskIdDependency,
    service: ToDoServiceDependency,
    auth_header: AuthHeaderDependency,
) -> PlainTextResponse:
    deleted = service.remove_task(auth_header, task_id)
    return PlainTextResponse(f'Task "{deleted}" has been deleted.')
