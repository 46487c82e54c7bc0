"""Domain value objects: validated task payloads."""

from tasknest.domain.value_objects.task import (
    ValidatedTask,
    clean_labels,
    parse_due_date,
    validate_task,
    validate_task_update,
)

__all__ = [
    "ValidatedTask",
    "clean_labels",
    "parse_due_date",
    "validate_task",
    "validate_task_update",
]
