"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (task stores).
"""

from tasknest.application.interfaces import (
    ITaskChangeListener,
    ITaskService,
    ITaskStore,
)
from tasknest.application.use_cases.tasks import TaskService

__all__ = [
    "ITaskChangeListener",
    "ITaskService",
    "ITaskStore",
    "TaskService",
]
