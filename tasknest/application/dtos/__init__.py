"""Application DTOs (plain dataclasses passed between layers)."""

from tasknest.application.dtos.task import NewTask, TaskChange, TaskChangeKind

__all__ = [
    "NewTask",
    "TaskChange",
    "TaskChangeKind",
]
