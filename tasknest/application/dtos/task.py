"""DTOs for task use cases (no dependency on ORM or wire formats)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.domain.value_objects.task import ValidatedTask


@dataclass(frozen=True)
class NewTask:
    """Task to insert. id and timestamps are assigned by the store when None."""

    owner_id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    description: str | None = None
    due_date: date | None = None
    labels: tuple[str, ...] = ()
    id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_validated(cls, owner_id: str, data: ValidatedTask) -> NewTask:
        """Attach owner_id to a validated creation payload."""
        return cls(
            owner_id=owner_id,
            title=data.title,
            description=data.description,
            status=data.status,
            priority=data.priority,
            due_date=data.due_date,
            labels=data.labels,
        )


class TaskChangeKind(str, Enum):
    """Kind of successful task mutation."""

    CREATED = "created"
    UPDATED = "updated"
    STATUS_CHANGED = "status_changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class TaskChange:
    """Success signal published after a mutation; task views for owner_id are stale."""

    kind: TaskChangeKind
    owner_id: str
    task_id: str
    task: TaskEntity
