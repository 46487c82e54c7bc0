"""Client-side task cache with optimistic updates.

The cache holds the caller's task list for a view layer. Every mutation is
two-phase: begin() applies the change locally and records what it replaced,
then the service call either confirms it (the authoritative record replaces
the tentative one) or rolls it back (the recorded record is put back where
it was). Only the touched record is restored, so mutations on different
tasks can be in flight together without undoing each other.

A rolled-back record goes back in front of the first record that followed
it when the mutation began and is still listed, so inserts and removals that
happened meanwhile do not shift it.

Same-task mutations are not serialized: whichever response resolves last
wins. The one exception is a confirmed delete: a task the server has deleted
is never brought back by the rollback of an earlier mutation on it. There is
no timeout; a call that never resolves leaves its tentative state in place.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from tasknest.application.interfaces.services import ITaskService
from tasknest.client.notifications import LoggingNotifier, Notifier
from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskStatus, normalize_status_filter
from tasknest.domain.exceptions import ResourceNotFoundException, TaskNestException
from tasknest.domain.value_objects.task import validate_task, validate_task_update
from tasknest.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

PROVISIONAL_ID_PREFIX = "pending-"

TasksSubscriber = Callable[[list[TaskEntity]], None]


@dataclass(frozen=True)
class DraggableLocation:
    """Position in a board: the status column id and the index within it."""

    droppable_id: str
    index: int


@dataclass(frozen=True)
class DropResult:
    """End of a drag gesture. destination is None when dropped outside any column."""

    draggable_id: str
    source: DraggableLocation
    destination: DraggableLocation | None = None


@dataclass(frozen=True)
class PendingMutation:
    """Rollback baseline of one in-flight mutation.

    baseline is the record before the change (None for a create) and
    followers the ids listed after it at that moment, nearest first.
    """

    task_id: str
    baseline: TaskEntity | None
    followers: tuple[str, ...] = ()


class TaskCache:
    """Task list for one owner, kept in step with a task service.

    Args:
        service: TaskService (in-process) or TaskApiClient (HTTP).
        owner_id: Caller identity passed to every service call.
        notifier: Receives success and error messages; defaults to logging.
    """

    def __init__(
        self,
        service: ITaskService,
        owner_id: str | None,
        notifier: Notifier | None = None,
    ) -> None:
        self._service = service
        self._owner_id = owner_id
        self._notifier = notifier or LoggingNotifier()
        self._tasks: list[TaskEntity] = []
        self._subscribers: list[TasksSubscriber] = []
        self._provisional_ids = itertools.count(1)
        self._in_flight = 0
        self._deleted: set[str] = set()

    @property
    def tasks(self) -> list[TaskEntity]:
        """Current list (a copy), newest first."""
        return list(self._tasks)

    @property
    def in_flight(self) -> int:
        """Number of mutations awaiting a service response."""
        return self._in_flight

    def subscribe(self, callback: TasksSubscriber) -> Callable[[], None]:
        """Call callback with the new list after every state change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self) -> None:
        snapshot = self.tasks
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Task cache subscriber failed")

    # ---- Derived views (no service calls) ----

    def filtered(self, active_filter: str | TaskStatus | None = None) -> list[TaskEntity]:
        """Tasks matching the status filter, in list order. 'all', None or unknown shows all."""
        status = normalize_status_filter(active_filter)
        if status is None:
            return self.tasks
        return [t for t in self._tasks if t.status == status]

    def board(self) -> dict[TaskStatus, list[TaskEntity]]:
        """Tasks grouped into status columns (TaskStatus order), list order kept within a column."""
        columns: dict[TaskStatus, list[TaskEntity]] = {status: [] for status in TaskStatus}
        for task in self._tasks:
            columns[task.status].append(task)
        return columns

    def get(self, task_id: str) -> TaskEntity | None:
        """Cached task by id, or None."""
        index = self._index_of(task_id)
        return self._tasks[index] if index is not None else None

    # ---- Loading ----

    async def refresh(self, status_filter: str | TaskStatus | None = None) -> bool:
        """Replace the list with the service's. On failure the list is kept."""
        try:
            tasks = await self._service.list_tasks(self._owner_id, status_filter)
        except TaskNestException as e:
            self._notifier.error(e.message)
            return False
        self._tasks = list(tasks)
        self._emit()
        return True

    # ---- Two-phase protocol ----

    def _index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def begin(
        self,
        task_id: str,
        change: Callable[[TaskEntity], TaskEntity | None],
    ) -> PendingMutation:
        """Apply change to the cached record (None removes it) and return the baseline.

        Raises:
            ResourceNotFoundException: If task_id is not in the cache.
        """
        index = self._index_of(task_id)
        if index is None:
            raise ResourceNotFoundException("task", task_id)
        baseline = self._tasks[index]
        updated = change(baseline)
        followers = tuple(t.id for t in self._tasks[index + 1 :])
        if updated is None:
            del self._tasks[index]
        else:
            self._tasks[index] = updated
        self._in_flight += 1
        self._emit()
        return PendingMutation(task_id=task_id, baseline=baseline, followers=followers)

    def begin_insert(self, task: TaskEntity) -> PendingMutation:
        """Prepend a tentative record (list order is newest first)."""
        self._tasks.insert(0, task)
        self._in_flight += 1
        self._emit()
        return PendingMutation(task_id=task.id, baseline=None)

    def confirm(self, pending: PendingMutation, record: TaskEntity | None) -> None:
        """Keep the optimistic state; swap in the authoritative record when given.

        Confirming a removal (record None on an existing task) marks the task
        deleted so no later rollback restores it.
        """
        self._in_flight -= 1
        if (
            record is None
            and pending.baseline is not None
            and self._index_of(pending.task_id) is None
        ):
            self._deleted.add(pending.task_id)
        if record is not None:
            index = self._index_of(pending.task_id)
            if index is not None:
                self._tasks[index] = record
        self._emit()

    def _restore_position(self, pending: PendingMutation) -> int:
        for follower in pending.followers:
            index = self._index_of(follower)
            if index is not None:
                return index
        return len(self._tasks)

    def rollback(self, pending: PendingMutation) -> None:
        """Restore the record this mutation touched; other records are left alone."""
        self._in_flight -= 1
        index = self._index_of(pending.task_id)
        if index is not None:
            del self._tasks[index]
        if pending.baseline is not None and pending.task_id not in self._deleted:
            self._tasks.insert(self._restore_position(pending), pending.baseline)
        self._emit()

    # ---- Mutations ----

    async def set_status(self, task_id: str, status: str | TaskStatus) -> bool:
        """Move a task to status optimistically. Returns True when confirmed."""
        try:
            new_status = TaskStatus.parse(status, "status")
            pending = self.begin(task_id, lambda t: t.with_changes(status=new_status))
        except TaskNestException as e:
            self._notifier.error(e.message)
            return False
        try:
            updated = await self._service.set_status(self._owner_id, task_id, new_status)
        except TaskNestException as e:
            self.rollback(pending)
            self._notifier.error(e.message)
            return False
        self.confirm(pending, updated)
        self._notifier.success(f"Task moved to {new_status.label}")
        return True

    async def delete(self, task_id: str) -> bool:
        """Remove a task optimistically. Returns True when confirmed."""
        try:
            pending = self.begin(task_id, lambda t: None)
        except TaskNestException as e:
            self._notifier.error(e.message)
            return False
        try:
            await self._service.delete_task(self._owner_id, task_id)
        except TaskNestException as e:
            self.rollback(pending)
            self._notifier.error(e.message)
            return False
        self.confirm(pending, None)
        self._notifier.success("Task deleted successfully")
        return True

    async def create(self, payload: Mapping[str, Any]) -> bool:
        """Validate locally, show a provisional task, then create it on the service."""
        try:
            data = validate_task(payload)
        except TaskNestException as e:
            self._notifier.error(e.message)
            return False
        pending = None
        if self._owner_id:
            now = utc_now()
            provisional = TaskEntity(
                id=f"{PROVISIONAL_ID_PREFIX}{next(self._provisional_ids)}",
                owner_id=self._owner_id,
                title=data.title,
                description=data.description,
                status=data.status,
                priority=data.priority,
                due_date=data.due_date,
                labels=data.labels,
                created_at=now,
                updated_at=now,
            )
            pending = self.begin_insert(provisional)
        try:
            created = await self._service.create_task(self._owner_id, payload)
        except TaskNestException as e:
            if pending is not None:
                self.rollback(pending)
            self._notifier.error(e.message)
            return False
        if pending is not None:
            self.confirm(pending, created)
        else:
            self._tasks.insert(0, created)
            self._emit()
        self._notifier.success("Task created successfully")
        return True

    async def update(self, task_id: str, payload: Mapping[str, Any]) -> bool:
        """Apply a partial update optimistically. Returns True when confirmed."""
        try:
            fields = validate_task_update(payload)
            pending = self.begin(task_id, lambda t: t.with_changes(**fields))
        except TaskNestException as e:
            self._notifier.error(e.message)
            return False
        try:
            updated = await self._service.update_task(self._owner_id, task_id, payload)
        except TaskNestException as e:
            self.rollback(pending)
            self._notifier.error(e.message)
            return False
        self.confirm(pending, updated)
        self._notifier.success("Task updated successfully")
        return True

    async def handle_drop(self, result: DropResult) -> bool:
        """Board drag end: a drop onto another column changes the task's status.

        Dropping outside any column, or back onto the source column at any
        index, does nothing (columns have no stored order).
        """
        destination = result.destination
        if destination is None or destination.droppable_id == result.source.droppable_id:
            return False
        return await self.set_status(result.draggable_id, destination.droppable_id)
