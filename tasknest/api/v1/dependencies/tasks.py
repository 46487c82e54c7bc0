"""Task store and service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from tasknest.application.interfaces.repositories import ITaskStore
from tasknest.application.use_cases.tasks import TaskService
from tasknest.domain.exceptions import StoreUnavailableException


def get_task_store(request: Request) -> ITaskStore:
    """Process-wide task store created in the lifespan (or injected via create_app)."""
    store = getattr(request.app.state, "task_store", None)
    if store is None:
        raise StoreUnavailableException("get_task_store", "Task store not initialized")
    return store


def get_task_service(
    store: Annotated[ITaskStore, Depends(get_task_store)],
) -> TaskService:
    """TaskService over the shared store (cheap; built per request)."""
    return TaskService(store)
