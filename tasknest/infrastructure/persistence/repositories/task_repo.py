"""SQL task store (Postgres via SQLAlchemy async). Implements ITaskStore."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tasknest.application.dtos.task import NewTask
from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.domain.exceptions import StoreUnavailableException
from tasknest.infrastructure.persistence.database import (
    Base,
    build_engine,
    build_sessionmaker,
)
from tasknest.infrastructure.persistence.models.task import Task
from tasknest.shared.utils.datetime import advance_timestamp, ensure_utc, utc_now
from tasknest.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

_BACKEND_ERRORS = (SQLAlchemyError, OSError)


def _to_entity(t: Task) -> TaskEntity:
    """Map Task ORM row to TaskEntity."""
    return TaskEntity(
        id=t.id,
        owner_id=t.owner_id,
        title=t.title,
        description=t.description,
        status=TaskStatus(t.status),
        priority=TaskPriority(t.priority),
        due_date=t.due_date,
        labels=tuple(t.labels or ()),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


def _column_value(value: Any) -> Any:
    if isinstance(value, (TaskStatus, TaskPriority)):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


class SqlTaskStore:
    """Task store backed by a SQL database.

    The engine is created on connect() (or on first use) and the task table
    is created if missing. Each operation runs in its own transaction.
    """

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._database_url = database_url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._clock = clock
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Create engine and schema. Idempotent."""
        if self._sessions is not None:
            return
        async with self._connect_lock:
            if self._sessions is not None:
                return
            engine = build_engine(
                self._database_url,
                echo=self._echo,
                pool_size=self._pool_size,
                max_overflow=self._max_overflow,
            )
            try:
                async with engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except _BACKEND_ERRORS as e:
                await engine.dispose()
                logger.exception("SQL task store connection failed")
                raise StoreUnavailableException("connect", str(e)) from e
            self._engine = engine
            self._sessions = build_sessionmaker(engine)
            logger.info("SQL task store connected")

    async def close(self) -> None:
        """Dispose the engine. Idempotent."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessions = None
            logger.info("SQL task store closed")

    async def _session(self) -> AsyncSession:
        await self.connect()
        return self._sessions()

    async def _get_owned(
        self, session: AsyncSession, task_id: str, owner_id: str
    ) -> Task | None:
        result = await session.execute(
            select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def find_by_owner(
        self, owner_id: str, status_filter: TaskStatus | None = None
    ) -> list[TaskEntity]:
        """Return owner's tasks, newest first."""
        stmt = select(Task).where(Task.owner_id == owner_id)
        if status_filter is not None:
            stmt = stmt.where(Task.status == status_filter.value)
        stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())
        try:
            async with await self._session() as session:
                result = await session.execute(stmt)
                return [_to_entity(t) for t in result.scalars().all()]
        except _BACKEND_ERRORS as e:
            logger.exception("SQL find_by_owner failed owner_id=%s", owner_id)
            raise StoreUnavailableException("find_by_owner", str(e)) from e

    async def find_one(self, task_id: str, owner_id: str) -> TaskEntity | None:
        """Return task if it exists and belongs to owner."""
        try:
            async with await self._session() as session:
                task = await self._get_owned(session, task_id, owner_id)
                return _to_entity(task) if task is not None else None
        except _BACKEND_ERRORS as e:
            logger.exception("SQL find_one failed task_id=%s", task_id)
            raise StoreUnavailableException("find_one", str(e)) from e

    async def insert(self, task: NewTask) -> TaskEntity:
        """Insert a new task row and return the stored record."""
        now = task.created_at or self._clock()
        row = Task(
            id=task.id or generate_cuid(),
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            priority=task.priority.value,
            due_date=task.due_date,
            labels=list(task.labels),
            created_at=now,
            updated_at=now,
        )
        try:
            async with await self._session() as session, session.begin():
                session.add(row)
                await session.flush()
                return _to_entity(row)
        except _BACKEND_ERRORS as e:
            logger.exception("SQL insert failed owner_id=%s", task.owner_id)
            raise StoreUnavailableException("insert", str(e)) from e

    async def update_fields(
        self, task_id: str, owner_id: str, fields: dict[str, Any]
    ) -> TaskEntity | None:
        """Apply the given fields and advance updated_at; None if not owned."""
        try:
            async with await self._session() as session, session.begin():
                row = await self._get_owned(session, task_id, owner_id)
                if row is None:
                    return None
                for name, value in fields.items():
                    setattr(row, name, _column_value(value))
                row.updated_at = advance_timestamp(
                    ensure_utc(row.updated_at), self._clock()
                )
                await session.flush()
                return _to_entity(row)
        except _BACKEND_ERRORS as e:
            logger.exception("SQL update failed task_id=%s", task_id)
            raise StoreUnavailableException("update_fields", str(e)) from e

    async def delete(self, task_id: str, owner_id: str) -> TaskEntity | None:
        """Delete the row if owned by owner; return the deleted record."""
        try:
            async with await self._session() as session, session.begin():
                row = await self._get_owned(session, task_id, owner_id)
                if row is None:
                    return None
                deleted = _to_entity(row)
                await session.delete(row)
                return deleted
        except _BACKEND_ERRORS as e:
            logger.exception("SQL delete failed task_id=%s", task_id)
            raise StoreUnavailableException("delete", str(e)) from e
