"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from tasknest.application.dtos.task import NewTask
    from tasknest.domain.entities.task import TaskEntity
    from tasknest.domain.enums import TaskStatus


class ITaskStore(Protocol):
    """Protocol for owner-scoped task persistence (DIP).

    A None return means "no task with this id owned by owner_id"; an owner
    mismatch is indistinguishable from a missing task. Backend failures raise
    StoreUnavailableException and are never reported as None.
    """

    async def connect(self) -> None:
        """Establish the backend connection. Idempotent; operations call it lazily."""

    async def close(self) -> None:
        """Release the backend connection. Idempotent."""

    async def find_by_owner(
        self, owner_id: str, status_filter: TaskStatus | None = None
    ) -> list[TaskEntity]:
        """Return owner's tasks (optionally one status), newest created_at first."""

    async def find_one(self, task_id: str, owner_id: str) -> TaskEntity | None:
        """Return the task if owned by owner_id."""

    async def insert(self, task: NewTask) -> TaskEntity:
        """Persist a new task; assign id and created_at when not set."""

    async def update_fields(
        self, task_id: str, owner_id: str, fields: dict[str, Any]
    ) -> TaskEntity | None:
        """Update only the given fields and refresh updated_at; return the updated task."""

    async def delete(self, task_id: str, owner_id: str) -> TaskEntity | None:
        """Delete the task; return the deleted record."""
