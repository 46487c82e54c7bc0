"""Task API: thin routes delegating to TaskService.

Identity comes from the bearer token; an unresolved identity is passed to
the service as None so every operation reports it the same way (401).
Domain exceptions are mapped to responses by core.exception_handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from tasknest.api.v1.dependencies import (
    get_current_owner_id_optional,
    get_task_service,
)
from tasknest.application.use_cases.tasks import TaskService
from tasknest.core.limiter import limit_writes
from tasknest.schemas.task import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdateRequest,
)

router = APIRouter()

OwnerId = Annotated[str | None, Depends(get_current_owner_id_optional)]
Service = Annotated[TaskService, Depends(get_task_service)]


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    owner_id: OwnerId,
    task_svc: Service,
    status: Annotated[
        str | None,
        Query(description="todo, in-progress, completed or all (default)"),
    ] = None,
):
    """List the caller's tasks, newest first. Unknown status values list all."""
    tasks = await task_svc.list_tasks(owner_id, status)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, owner_id: OwnerId, task_svc: Service):
    """Get one of the caller's tasks."""
    task = await task_svc.get_task(owner_id, task_id)
    return TaskResponse.model_validate(task)


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    owner_id: OwnerId,
    task_svc: Service,
):
    """Create a task owned by the caller."""
    created = await task_svc.create_task(owner_id, body.model_dump())
    return TaskResponse.model_validate(created)


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    owner_id: OwnerId,
    task_svc: Service,
):
    """Update the fields present in the body."""
    updated = await task_svc.update_task(
        owner_id, task_id, body.model_dump(exclude_unset=True)
    )
    return TaskResponse.model_validate(updated)


@router.put("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def set_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusUpdate,
    owner_id: OwnerId,
    task_svc: Service,
):
    """Move a task to another status column."""
    updated = await task_svc.set_status(owner_id, task_id, body.status)
    return TaskResponse.model_validate(updated)


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    owner_id: OwnerId,
    task_svc: Service,
):
    """Delete a task. Deleting it again returns 404."""
    await task_svc.delete_task(owner_id, task_id)
