"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application,
infrastructure and client layers.
"""

from tasknest.domain.entities import TaskEntity
from tasknest.domain.enums import (
    STATUS_FILTER_ALL,
    TaskPriority,
    TaskStatus,
    normalize_status_filter,
)
from tasknest.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    StoreUnavailableException,
    TaskNestException,
    ValidationException,
)
from tasknest.domain.value_objects import (
    ValidatedTask,
    validate_task,
    validate_task_update,
)

__all__ = [
    # Entities
    "TaskEntity",
    # Enums
    "STATUS_FILTER_ALL",
    "TaskPriority",
    "TaskStatus",
    "normalize_status_filter",
    # Exceptions
    "AuthenticationException",
    "ResourceNotFoundException",
    "StoreUnavailableException",
    "TaskNestException",
    "ValidationException",
    # Value objects
    "ValidatedTask",
    "validate_task",
    "validate_task_update",
]
