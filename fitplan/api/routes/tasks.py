"""Task list API routes."""
from __future__ import annotations

from time import perf_counter
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from fitplan.api.schemas.task import (
    TaskCreateRequest,
    TaskDeleteRequest,
    TaskDeleteResponse,
    TaskRecord,
    TaskUpdateRequest,
)
from fitplan.core.config import get_settings
from fitplan.db.deps import get_db
from fitplan.db.models.task import Task
from fitplan.observability.metrics import log_metric
from fitplan.observability.tracing import trace
from fitplan.services.task_store import (
    InvalidParentError,
    TaskNotFoundError,
    create_task,
    delete_task,
    list_tasks,
    update_task,
)

router = APIRouter()


@router.get(
    "/tasks",
    response_model=List[TaskRecord],
    response_model_exclude_none=True,
    tags=["tasks"],
)
def get_tasks(http_request: Request, db: Session = Depends(get_db)) -> List[TaskRecord]:
    """Return the whole task list, subtasks included."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace("task.list", metadata={"route": "/tasks"}, request_id=request_id):
        tasks = list_tasks(db)

    log_metric("task.list.count", len(tasks))
    return [_serialize_task(task) for task in tasks]


@router.post(
    "/tasks",
    response_model=TaskRecord,
    response_model_exclude_none=True,
    tags=["tasks"],
)
def post_task(
    payload: TaskCreateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> TaskRecord:
    """Create a task or, with ``parentId``, a subtask."""
    request_id = getattr(http_request.state, "request_id", None)
    metadata = {
        "route": "/tasks",
        "parent_id": payload.parent_id,
        "title_length": len(payload.title),
    }
    with trace("task.create", metadata=metadata, request_id=request_id):
        try:
            task = create_task(
                db,
                title=payload.title,
                completed=payload.completed,
                parent_id=payload.parent_id,
                validate_parent=get_settings().validate_task_parents,
            )
        except InvalidParentError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    log_metric("task.create.success", 1, metadata={"subtask": payload.parent_id is not None})
    return _serialize_task(task)


@router.put(
    "/tasks",
    response_model=TaskRecord,
    response_model_exclude_none=True,
    tags=["tasks"],
)
def put_task(
    payload: TaskUpdateRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> TaskRecord:
    """Replace a stored task with the supplied record."""
    request_id = getattr(http_request.state, "request_id", None)
    start = perf_counter()
    with trace("task.update", metadata={"route": "/tasks", "task_id": payload.id}, request_id=request_id):
        try:
            task = update_task(
                db,
                payload.id,
                title=payload.title,
                completed=payload.completed,
                parent_id=payload.parent_id,
                validate_parent=get_settings().validate_task_parents,
            )
        except TaskNotFoundError as exc:
            log_metric("task.update.not_found", 1, metadata={"task_id": payload.id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found") from exc
        except InvalidParentError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    log_metric("task.update.success", 1, metadata={"task_id": payload.id})
    log_metric("task.update.latency_ms", (perf_counter() - start) * 1000)
    return _serialize_task(task)


@router.delete("/tasks", response_model=TaskDeleteResponse, tags=["tasks"])
def remove_task(
    payload: TaskDeleteRequest,
    http_request: Request,
    db: Session = Depends(get_db),
) -> TaskDeleteResponse:
    """Delete by id. Unknown ids are not an error."""
    request_id = getattr(http_request.state, "request_id", None)
    with trace("task.delete", metadata={"route": "/tasks", "task_id": payload.id}, request_id=request_id):
        removed = delete_task(db, payload.id)

    log_metric("task.delete.removed", removed, metadata={"task_id": payload.id})
    return TaskDeleteResponse(success=True)


def _serialize_task(task: Task) -> TaskRecord:
    return TaskRecord(
        id=task.id,
        title=task.title or "",
        completed=bool(task.completed),
        parent_id=task.parent_id,
    )
