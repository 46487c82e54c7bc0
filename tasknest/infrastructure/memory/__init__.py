"""In-process task store."""

from tasknest.infrastructure.memory.task_store import InMemoryTaskStore

__all__ = [
    "InMemoryTaskStore",
]
