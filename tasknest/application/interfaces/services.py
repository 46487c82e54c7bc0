"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from tasknest.application.dtos.task import TaskChange
    from tasknest.domain.entities.task import TaskEntity
    from tasknest.domain.enums import TaskStatus


class ITaskChangeListener(Protocol):
    """Receives the success signal of every task mutation (view invalidation)."""

    async def __call__(self, change: TaskChange) -> None:
        """Handle a successful mutation."""


class ITaskService(Protocol):
    """Task operations as seen by callers (in-process TaskService or HTTP TaskApiClient).

    Failures raise AuthenticationException, ValidationException,
    ResourceNotFoundException or StoreUnavailableException.
    """

    async def list_tasks(
        self, owner_id: str | None, status_filter: str | TaskStatus | None = None
    ) -> list[TaskEntity]:
        """Return the caller's tasks, newest first."""

    async def get_task(self, owner_id: str | None, task_id: str) -> TaskEntity:
        """Return one of the caller's tasks."""

    async def create_task(
        self, owner_id: str | None, payload: Mapping[str, Any]
    ) -> TaskEntity:
        """Validate and create a task."""

    async def update_task(
        self, owner_id: str | None, task_id: str, payload: Mapping[str, Any]
    ) -> TaskEntity:
        """Validate and apply a partial update."""

    async def set_status(
        self, owner_id: str | None, task_id: str, status: str | TaskStatus
    ) -> TaskEntity:
        """Move a task to another status."""

    async def delete_task(self, owner_id: str | None, task_id: str) -> None:
        """Delete a task."""
