"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Used when database_backend is 'postgres'. The engine is owned by the
SqlTaskStore that creates it (no module-level engine), so import does not
trigger Settings validation and tests can build isolated stores.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def build_engine(
    database_url: str,
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
) -> AsyncEngine:
    """Create the async engine. Pool options apply to server databases only."""
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if "postgresql" in database_url:
        kwargs["pool_size"] = pool_size if pool_size is not None else 20
        kwargs["max_overflow"] = max_overflow if max_overflow is not None else 30
        kwargs["pool_recycle"] = 3600
        kwargs["connect_args"] = {"command_timeout": 60}
    return create_async_engine(database_url, **kwargs)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory: no expiry on commit, explicit flushes."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )
