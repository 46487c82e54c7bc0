"""Task domain entity.

Represents the business concept of a task, independent of persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.domain.exceptions import ValidationException


@dataclass(frozen=True)
class TaskEntity:
    """Domain entity for a task owned by a single user.

    Immutable; mutations produce a new entity (see with_changes). Validation
    runs on construction so an entity with an empty title or an owner-less
    record cannot exist.
    """

    id: str
    owner_id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    due_date: date | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Task ID is required", field="id")
        if not self.owner_id:
            raise ValidationException("Task must belong to an owner", field="owner_id")
        if not self.title or not self.title.strip():
            raise ValidationException("Title is required", field="title")

    def belongs_to(self, owner_id: str) -> bool:
        """Return whether this task is owned by owner_id."""
        return self.owner_id == owner_id

    def with_changes(self, **changes: Any) -> TaskEntity:
        """Return a copy with the given fields replaced. id and owner_id never change."""
        changes.pop("id", None)
        changes.pop("owner_id", None)
        changes.pop("created_at", None)
        if "labels" in changes:
            changes["labels"] = tuple(changes["labels"])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready wire form (due_date as YYYY-MM-DD, ISO timestamps)."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "labels": list(self.labels),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaskEntity:
        """Build an entity from the wire form produced by to_dict()."""
        due = data.get("due_date")
        return cls(
            id=data["id"],
            owner_id=data["owner_id"],
            title=data["title"],
            description=data.get("description"),
            status=TaskStatus.parse(data.get("status"), "status"),
            priority=TaskPriority.parse(data.get("priority"), "priority"),
            due_date=date.fromisoformat(due) if due else None,
            labels=tuple(data.get("labels") or ()),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )
