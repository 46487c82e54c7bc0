"""Task payload validation (the task record model).

validate_task() turns a raw creation payload into a ValidatedTask;
validate_task_update() normalizes the fields present in a partial update.
Both are pure and raise ValidationException for the first failing field,
checked in the order title, description, status, priority, due_date, labels.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.domain.exceptions import ValidationException


@dataclass(frozen=True)
class ValidatedTask:
    """Value object for a validated task creation payload."""

    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    description: str | None = None
    due_date: date | None = None
    labels: tuple[str, ...] = ()


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_title(value: Any) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationException("Title must be text", field="title")
    title = (value or "").strip()
    if not title:
        raise ValidationException("Title is required", field="title")
    return title


def _clean_description(value: Any) -> str | None:
    if _is_blank(value):
        return None
    if not isinstance(value, str):
        raise ValidationException("Description must be text", field="description")
    return value.strip()


def parse_due_date(value: Any) -> date | None:
    """Parse a date-like value. Absent or empty means no due date.

    Accepts a date, a datetime (date part kept), or an ISO string
    ('YYYY-MM-DD' or a full ISO datetime). Any other value is an error,
    distinct from 'no due date'.

    Raises:
        ValidationException: If value is present but not a valid calendar date.
    """
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValidationException(f"Invalid due date {value!r}", field="due_date")


def clean_labels(value: Any) -> tuple[str, ...]:
    """Trim labels, drop empties, keep order and duplicates.

    A single string is treated as a comma-separated list (form submission).

    Raises:
        ValidationException: If labels is not a string or a sequence of strings.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValidationException("Labels must be a list of text", field="labels")
    labels: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationException("Labels must be a list of text", field="labels")
        label = item.strip()
        if label:
            labels.append(label)
    return tuple(labels)


def _status_or_default(value: Any) -> TaskStatus:
    return TaskStatus.TODO if _is_blank(value) else TaskStatus.parse(value, "status")


def _priority_or_default(value: Any) -> TaskPriority:
    return (
        TaskPriority.MEDIUM
        if _is_blank(value)
        else TaskPriority.parse(value, "priority")
    )


def validate_task(payload: Mapping[str, Any]) -> ValidatedTask:
    """Validate a task creation payload.

    Missing status defaults to todo, missing priority to medium. Unknown keys
    are ignored.

    Args:
        payload: Raw field values.

    Returns:
        ValidatedTask with normalized values.

    Raises:
        ValidationException: For the first failing field.
    """
    title = _clean_title(payload.get("title"))
    description = _clean_description(payload.get("description"))
    status = _status_or_default(payload.get("status"))
    priority = _priority_or_default(payload.get("priority"))
    due_date = parse_due_date(payload.get("due_date"))
    labels = clean_labels(payload.get("labels"))
    return ValidatedTask(
        title=title,
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        labels=labels,
    )


def validate_task_update(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the fields present in a partial update.

    Every provided field is re-validated with the creation rules. An empty
    description or due_date clears it; an empty status or priority is
    rejected (there is nothing to reset it to on update).

    Returns:
        Normalized field map containing only the provided keys.

    Raises:
        ValidationException: For the first failing field, or if no known field
            is provided.
    """
    fields: dict[str, Any] = {}
    if "title" in payload:
        fields["title"] = _clean_title(payload["title"])
    if "description" in payload:
        fields["description"] = _clean_description(payload["description"])
    if "status" in payload:
        fields["status"] = TaskStatus.parse(payload["status"], "status")
    if "priority" in payload:
        fields["priority"] = TaskPriority.parse(payload["priority"], "priority")
    if "due_date" in payload:
        fields["due_date"] = parse_due_date(payload["due_date"])
    if "labels" in payload:
        fields["labels"] = clean_labels(payload["labels"])
    if not fields:
        raise ValidationException("No fields to update")
    return fields
