"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from tasknest.domain.entities.task import TaskEntity

__all__ = [
    "TaskEntity",
]
