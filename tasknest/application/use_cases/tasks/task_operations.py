"""Task operations: list, get, create, update, set status, delete (delegate to ITaskStore)."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from tasknest.application.dtos.task import NewTask, TaskChange, TaskChangeKind
from tasknest.application.interfaces.repositories import ITaskStore
from tasknest.application.interfaces.services import ITaskChangeListener
from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskStatus, normalize_status_filter
from tasknest.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    StoreUnavailableException,
)
from tasknest.domain.value_objects.task import validate_task, validate_task_update

logger = logging.getLogger(__name__)


class TaskService:
    """Single entry point for task reads and mutations (owner-scoped).

    Every operation resolves the caller first: a missing owner_id raises
    AuthenticationException before the store is touched. Store misses become
    ResourceNotFoundException; StoreUnavailableException propagates as-is.
    Nothing is retried. After each successful mutation the registered
    change listeners are notified so cached task views can be refreshed.
    """

    def __init__(
        self,
        store: ITaskStore,
        listeners: Iterable[ITaskChangeListener] = (),
    ) -> None:
        self.store = store
        self._listeners: list[ITaskChangeListener] = list(listeners)

    def add_listener(self, listener: ITaskChangeListener) -> None:
        """Register a listener for the mutation success signal."""
        self._listeners.append(listener)

    @staticmethod
    def _require_owner(owner_id: str | None) -> str:
        if not owner_id:
            raise AuthenticationException()
        return owner_id

    async def _publish(
        self, kind: TaskChangeKind, owner_id: str, task: TaskEntity
    ) -> None:
        change = TaskChange(kind=kind, owner_id=owner_id, task_id=task.id, task=task)
        for listener in self._listeners:
            try:
                await listener(change)
            except Exception:
                logger.exception(
                    "Task change listener failed kind=%s task_id=%s", kind.value, task.id
                )

    async def list_tasks(
        self,
        owner_id: str | None,
        status_filter: str | TaskStatus | None = None,
    ) -> list[TaskEntity]:
        """Return the owner's tasks, newest first. Unknown or 'all' filters mean no filter."""
        owner = self._require_owner(owner_id)
        status = normalize_status_filter(status_filter)
        return await self.store.find_by_owner(owner, status)

    async def get_task(self, owner_id: str | None, task_id: str) -> TaskEntity:
        """Return task by id if owned by owner; else raise ResourceNotFoundException."""
        owner = self._require_owner(owner_id)
        task = await self.store.find_one(task_id, owner)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def create_task(
        self, owner_id: str | None, payload: Mapping[str, Any]
    ) -> TaskEntity:
        """Validate payload and create a task owned by owner."""
        owner = self._require_owner(owner_id)
        data = validate_task(payload)
        try:
            task = await self.store.insert(NewTask.from_validated(owner, data))
        except StoreUnavailableException:
            logger.warning("Failed to create task owner_id=%s", owner)
            raise
        logger.info("Task created task_id=%s owner_id=%s", task.id, owner)
        await self._publish(TaskChangeKind.CREATED, owner, task)
        return task

    async def update_task(
        self,
        owner_id: str | None,
        task_id: str,
        payload: Mapping[str, Any],
    ) -> TaskEntity:
        """Re-validate every provided field, then update; raise ResourceNotFoundException if not owned."""
        owner = self._require_owner(owner_id)
        fields = validate_task_update(payload)
        task = await self._update(owner, task_id, fields, "update task")
        logger.info(
            "Task updated task_id=%s owner_id=%s fields=%s",
            task.id,
            owner,
            ",".join(sorted(fields)),
        )
        await self._publish(TaskChangeKind.UPDATED, owner, task)
        return task

    async def set_status(
        self,
        owner_id: str | None,
        task_id: str,
        status: str | TaskStatus,
    ) -> TaskEntity:
        """Move a task to status. Any status may follow any other (including reopen)."""
        owner = self._require_owner(owner_id)
        new_status = TaskStatus.parse(status, "status")
        task = await self._update(owner, task_id, {"status": new_status}, "update task status")
        logger.info(
            "Task status changed task_id=%s owner_id=%s status=%s",
            task.id,
            owner,
            new_status.value,
        )
        await self._publish(TaskChangeKind.STATUS_CHANGED, owner, task)
        return task

    async def delete_task(self, owner_id: str | None, task_id: str) -> None:
        """Delete a task; a repeated delete raises ResourceNotFoundException."""
        owner = self._require_owner(owner_id)
        try:
            deleted = await self.store.delete(task_id, owner)
        except StoreUnavailableException:
            logger.warning("Failed to delete task task_id=%s owner_id=%s", task_id, owner)
            raise
        if deleted is None:
            raise ResourceNotFoundException("task", task_id)
        logger.info("Task deleted task_id=%s owner_id=%s", task_id, owner)
        await self._publish(TaskChangeKind.DELETED, owner, deleted)

    async def _update(
        self, owner: str, task_id: str, fields: dict[str, Any], action: str
    ) -> TaskEntity:
        try:
            task = await self.store.update_fields(task_id, owner, fields)
        except StoreUnavailableException:
            logger.warning("Failed to %s task_id=%s owner_id=%s", action, task_id, owner)
            raise
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task
