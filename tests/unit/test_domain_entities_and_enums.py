"""Domain enums and TaskEntity: parsing, filters, immutability, wire form."""

from datetime import UTC, date, datetime

import pytest

from tasknest.domain.entities import TaskEntity
from tasknest.domain.enums import (
    STATUS_FILTER_ALL,
    TaskPriority,
    TaskStatus,
    normalize_status_filter,
)
from tasknest.domain.exceptions import ValidationException

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


def _task(**overrides) -> TaskEntity:
    data = {
        "id": "t1",
        "owner_id": "u1",
        "title": "Write report",
        "status": TaskStatus.TODO,
        "priority": TaskPriority.MEDIUM,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return TaskEntity(**data)


def test_status_values_are_closed_set() -> None:
    assert TaskStatus.values() == ["todo", "in-progress", "completed"]
    assert TaskPriority.values() == ["low", "medium", "high"]


@pytest.mark.parametrize("raw", ["todo", " in-progress ", TaskStatus.COMPLETED])
def test_status_parse_accepts_members_and_strings(raw) -> None:
    assert TaskStatus.parse(raw, "status") in set(TaskStatus)


@pytest.mark.parametrize("raw", ["done", "TODO", "", None, 3])
def test_status_parse_rejects_outside_values(raw) -> None:
    with pytest.raises(ValidationException) as exc_info:
        TaskStatus.parse(raw, "status")
    assert exc_info.value.field == "status"


def test_priority_parse_rejects_unknown() -> None:
    with pytest.raises(ValidationException) as exc_info:
        TaskPriority.parse("urgent", "priority")
    assert exc_info.value.field == "priority"


def test_status_label_replaces_dash() -> None:
    assert TaskStatus.IN_PROGRESS.label == "in progress"
    assert TaskStatus.TODO.label == "todo"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        (STATUS_FILTER_ALL, None),
        ("bogus", None),
        ("todo", TaskStatus.TODO),
        ("in-progress", TaskStatus.IN_PROGRESS),
        (TaskStatus.COMPLETED, TaskStatus.COMPLETED),
    ],
)
def test_normalize_status_filter(raw, expected) -> None:
    """'all', absent and unknown values mean no filter; never an error."""
    assert normalize_status_filter(raw) is expected


def test_entity_requires_title() -> None:
    with pytest.raises(ValidationException) as exc_info:
        _task(title="   ")
    assert exc_info.value.field == "title"


def test_entity_requires_owner() -> None:
    with pytest.raises(ValidationException):
        _task(owner_id="")


def test_with_changes_keeps_identity_fields() -> None:
    """id, owner_id and created_at never change through with_changes."""
    task = _task()
    changed = task.with_changes(
        id="other",
        owner_id="someone",
        created_at=datetime(2020, 1, 1, tzinfo=UTC),
        status=TaskStatus.COMPLETED,
        labels=["a", "b"],
    )
    assert changed.id == "t1"
    assert changed.owner_id == "u1"
    assert changed.created_at == NOW
    assert changed.status is TaskStatus.COMPLETED
    assert changed.labels == ("a", "b")
    assert task.status is TaskStatus.TODO


def test_entity_is_immutable() -> None:
    task = _task()
    with pytest.raises(AttributeError):
        task.title = "changed"  # type: ignore[misc]


def test_wire_form_round_trip() -> None:
    """to_dict() uses YYYY-MM-DD dates and plain values; from_dict() reads it back."""
    task = _task(
        status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.HIGH,
        due_date=date(2026, 4, 2),
        labels=("work", "q2"),
        description="Quarterly",
    )
    data = task.to_dict()
    assert data["due_date"] == "2026-04-02"
    assert data["status"] == "in-progress"
    assert data["priority"] == "high"
    assert data["labels"] == ["work", "q2"]
    assert TaskEntity.from_dict(data) == task
