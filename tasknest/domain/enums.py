"""Domain enumerations for TaskNest.

Closed sets of task values. Anything outside a set is rejected by parse()
at the first point a raw value enters the system.
"""

from enum import Enum
from typing import Any

from tasknest.domain.exceptions import ValidationException


class _ValuesMixin:
    """Mixin that adds values() and parse() to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Any, field: str):
        """Return the member for value; raise ValidationException if not in the set.

        Args:
            value: Raw value (member or string).
            field: Field name reported on failure.

        Raises:
            ValidationException: If value is not one of values().
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        expected = ", ".join(cls.values())
        raise ValidationException(
            f"Invalid {field} {value!r}; expected one of: {expected}",
            field=field,
        )


class TaskStatus(_ValuesMixin, str, Enum):
    """Workflow position of a task. Any status may move to any other."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        """Human-readable form (e.g. 'in progress') for notifications."""
        return self.value.replace("-", " ")


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Boundary value meaning "no status filter".
STATUS_FILTER_ALL = "all"


def normalize_status_filter(value: str | TaskStatus | None) -> TaskStatus | None:
    """Map a boundary status filter to a TaskStatus, or None for 'no filter'.

    'all', absent, or any unknown string means no filter; it is never an error.
    """
    if isinstance(value, TaskStatus):
        return value
    if not value:
        return None
    try:
        return TaskStatus(value.strip())
    except ValueError:
        return None
