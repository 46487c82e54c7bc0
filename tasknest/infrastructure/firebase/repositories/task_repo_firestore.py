"""Firestore-backed task store (implements ITaskStore)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError

from tasknest.application.dtos.task import NewTask
from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.domain.exceptions import StoreUnavailableException
from tasknest.infrastructure.firebase._rest_client import (
    CollectionReference,
    DocumentExistsError,
    FirestoreRESTClient,
)
from tasknest.infrastructure.firebase.collections import COLLECTION_TASKS
from tasknest.shared.utils.datetime import advance_timestamp, ensure_utc, utc_now
from tasknest.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

# Errors that mean "the backend could not serve the request".
_BACKEND_ERRORS = (
    httpx.HTTPError,
    GoogleAuthError,
    DocumentExistsError,
    OSError,
    ValueError,
)


def _to_entity(doc_id: str, data: dict[str, Any]) -> TaskEntity:
    due = data.get("due_date")
    return TaskEntity(
        id=doc_id,
        owner_id=data.get("owner_id", ""),
        title=data.get("title", ""),
        description=data.get("description"),
        status=TaskStatus(data.get("status", TaskStatus.TODO.value)),
        priority=TaskPriority(data.get("priority", TaskPriority.MEDIUM.value)),
        due_date=date.fromisoformat(due) if due else None,
        labels=tuple(data.get("labels") or ()),
        created_at=ensure_utc(data["created_at"]),
        updated_at=ensure_utc(data["updated_at"]),
    )


class FirestoreTaskStore:
    """Task store using Firestore. Same contract as InMemoryTaskStore and SqlTaskStore.

    The REST client is created on first use (or injected) and shared by all
    requests; close() releases its HTTP pool.
    """

    def __init__(
        self,
        client: FirestoreRESTClient | None = None,
        *,
        client_factory: Callable[[], FirestoreRESTClient] | None = None,
        collection: str = COLLECTION_TASKS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if client is None and client_factory is None:
            raise ValueError("FirestoreTaskStore needs a client or a client_factory")
        self._client = client
        self._client_factory = client_factory
        self._owns_client = client is None
        self._collection = collection
        self._clock = clock
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Create the Firestore client if needed. Idempotent."""
        if self._client is not None:
            return
        async with self._connect_lock:
            if self._client is not None:
                return
            if self._client_factory is None:
                raise StoreUnavailableException("connect", "Firestore client is closed")
            try:
                self._client = self._client_factory()
            except _BACKEND_ERRORS as e:
                logger.exception("Firestore initialization failed")
                raise StoreUnavailableException("connect", str(e)) from e

    async def close(self) -> None:
        """Close the client this store created. Idempotent; an injected client is left open."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            logger.info("Firestore HTTP client closed")

    async def _coll(self) -> CollectionReference:
        await self.connect()
        return self._client.collection(self._collection)

    async def find_by_owner(
        self, owner_id: str, status_filter: TaskStatus | None = None
    ) -> list[TaskEntity]:
        """Return owner's tasks (server-side where + order), newest first."""
        try:
            q = (await self._coll()).where("owner_id", "==", owner_id)
            if status_filter is not None:
                q = q.where("status", "==", status_filter.value)
            q = q.order_by("created_at", "DESCENDING")
            return [_to_entity(s.id, s.to_dict()) async for s in q.stream()]
        except _BACKEND_ERRORS as e:
            logger.exception("Firestore find_by_owner failed owner_id=%s", owner_id)
            raise StoreUnavailableException("find_by_owner", str(e)) from e

    async def find_one(self, task_id: str, owner_id: str) -> TaskEntity | None:
        """Return task if the document exists and belongs to owner."""
        try:
            doc = await (await self._coll()).document(task_id).get()
        except _BACKEND_ERRORS as e:
            logger.exception("Firestore find_one failed task_id=%s", task_id)
            raise StoreUnavailableException("find_one", str(e)) from e
        if not doc:
            return None
        data = doc.to_dict()
        if data.get("owner_id") != owner_id:
            return None
        return _to_entity(doc.id, data)

    async def insert(self, task: NewTask) -> TaskEntity:
        """Create the task document (atomic on document ID)."""
        task_id = task.id or generate_cuid()
        now = ensure_utc(task.created_at or self._clock())
        data = {
            "owner_id": task.owner_id,
            "title": task.title,
            "description": task.description,
            "status": task.status,
            "priority": task.priority,
            "due_date": task.due_date,
            "labels": task.labels,
            "created_at": now,
            "updated_at": now,
        }
        try:
            await (await self._coll()).create(task_id, data)
        except _BACKEND_ERRORS as e:
            logger.exception("Firestore insert failed owner_id=%s", task.owner_id)
            raise StoreUnavailableException("insert", str(e)) from e
        return TaskEntity(id=task_id, **data)

    async def update_fields(
        self, task_id: str, owner_id: str, fields: dict[str, Any]
    ) -> TaskEntity | None:
        """Update only the given fields (updateMask) and refresh updated_at."""
        current = await self.find_one(task_id, owner_id)
        if current is None:
            return None
        updates = dict(fields)
        updates["updated_at"] = advance_timestamp(current.updated_at, self._clock())
        try:
            snapshot = await (await self._coll()).document(task_id).update(updates)
        except _BACKEND_ERRORS as e:
            logger.exception("Firestore update failed task_id=%s", task_id)
            raise StoreUnavailableException("update_fields", str(e)) from e
        if snapshot is None:
            return None
        return _to_entity(snapshot.id, snapshot.to_dict())

    async def delete(self, task_id: str, owner_id: str) -> TaskEntity | None:
        """Delete the document if owned by owner; return the deleted record."""
        current = await self.find_one(task_id, owner_id)
        if current is None:
            return None
        try:
            await (await self._coll()).document(task_id).delete()
        except _BACKEND_ERRORS as e:
            logger.exception("Firestore delete failed task_id=%s", task_id)
            raise StoreUnavailableException("delete", str(e)) from e
        return current
