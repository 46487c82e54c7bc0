"""Application use cases (orchestrate domain and ports)."""

from tasknest.application.use_cases.tasks import TaskService

__all__ = [
    "TaskService",
]
