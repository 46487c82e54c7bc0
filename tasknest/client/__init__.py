"""Client side of the task service: optimistic cache and HTTP client."""

from tasknest.client.api_client import TaskApiClient
from tasknest.client.notifications import LoggingNotifier, Notifier
from tasknest.client.task_cache import (
    DraggableLocation,
    DropResult,
    PendingMutation,
    TaskCache,
)

__all__ = [
    "DraggableLocation",
    "DropResult",
    "LoggingNotifier",
    "Notifier",
    "PendingMutation",
    "TaskApiClient",
    "TaskCache",
]
