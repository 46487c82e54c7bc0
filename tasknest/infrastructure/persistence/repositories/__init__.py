"""Persistence repositories. Re-exports for dependency injection."""

from tasknest.infrastructure.persistence.repositories.task_repo import SqlTaskStore

__all__ = [
    "SqlTaskStore",
]
