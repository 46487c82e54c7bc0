"""Task use cases."""

from tasknest.application.use_cases.tasks.task_operations import TaskService

__all__ = [
    "TaskService",
]
