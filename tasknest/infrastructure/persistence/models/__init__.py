"""Persistence models: ORM entities and mixins."""

from tasknest.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OwnerMixin,
    TimestampMixin,
)
from tasknest.infrastructure.persistence.models.task import Task

__all__ = [
    "CuidMixin",
    "OwnerMixin",
    "Task",
    "TimestampMixin",
]
