"""In-process task store (implements ITaskStore).

Holds tasks in a dict for the lifetime of the process. Used for development
and tests, and as the reference behaviour for the Firestore and SQL stores.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from tasknest.application.dtos.task import NewTask
from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskStatus
from tasknest.shared.utils.datetime import advance_timestamp, utc_now
from tasknest.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """Task store backed by a dict keyed by task id.

    Mutations are serialized with an asyncio.Lock. Reads return entities,
    which are immutable, so callers never share mutable state with the store.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock
        self._tasks: dict[str, TaskEntity] = {}
        # Insertion sequence breaks created_at ties when ordering.
        self._seq: dict[str, int] = {}
        self._counter = itertools.count()
        self._lock = asyncio.Lock()
        self._connected = False

    async def connect(self) -> None:
        """Mark the store ready. Idempotent."""
        if self._connected:
            return
        self._connected = True
        logger.info("In-memory task store ready")

    async def close(self) -> None:
        """Mark the store closed. Data is kept; idempotent."""
        self._connected = False

    async def find_by_owner(
        self, owner_id: str, status_filter: TaskStatus | None = None
    ) -> list[TaskEntity]:
        await self.connect()
        tasks = [
            t
            for t in self._tasks.values()
            if t.owner_id == owner_id
            and (status_filter is None or t.status == status_filter)
        ]
        tasks.sort(key=lambda t: (t.created_at, self._seq[t.id]), reverse=True)
        return tasks

    async def find_one(self, task_id: str, owner_id: str) -> TaskEntity | None:
        await self.connect()
        task = self._tasks.get(task_id)
        if task is None or not task.belongs_to(owner_id):
            return None
        return task

    async def insert(self, task: NewTask) -> TaskEntity:
        await self.connect()
        async with self._lock:
            now = task.created_at or self._clock()
            entity = TaskEntity(
                id=task.id or generate_cuid(),
                owner_id=task.owner_id,
                title=task.title,
                description=task.description,
                status=task.status,
                priority=task.priority,
                due_date=task.due_date,
                labels=tuple(task.labels),
                created_at=now,
                updated_at=now,
            )
            self._tasks[entity.id] = entity
            self._seq[entity.id] = next(self._counter)
            return entity

    async def update_fields(
        self, task_id: str, owner_id: str, fields: dict[str, Any]
    ) -> TaskEntity | None:
        await self.connect()
        async with self._lock:
            current = self._tasks.get(task_id)
            if current is None or not current.belongs_to(owner_id):
                return None
            updated = current.with_changes(
                **fields,
                updated_at=advance_timestamp(current.updated_at, self._clock()),
            )
            self._tasks[task_id] = updated
            return updated

    async def delete(self, task_id: str, owner_id: str) -> TaskEntity | None:
        await self.connect()
        async with self._lock:
            current = self._tasks.get(task_id)
            if current is None or not current.belongs_to(owner_id):
                return None
            del self._tasks[task_id]
            self._seq.pop(task_id, None)
            return current
