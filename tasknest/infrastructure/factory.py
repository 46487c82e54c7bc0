"""Task store factory: creates the memory, Firestore or SQL backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tasknest.application.interfaces.repositories import ITaskStore

if TYPE_CHECKING:
    from tasknest.core.config import Settings


class TaskStoreFactory:
    """Factory for task store instances based on configuration."""

    @staticmethod
    def create_task_store(settings: "Settings | None" = None) -> ITaskStore:
        """Create the task store selected by DATABASE_BACKEND.

        The store is not connected yet; call connect() (lifespan does) or let
        the first operation connect it.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            InMemoryTaskStore, FirestoreTaskStore or SqlTaskStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from tasknest.core.config import get_settings

        s = settings or get_settings()
        backend = s.database_backend.lower()

        if backend == "memory":
            from tasknest.infrastructure.memory import InMemoryTaskStore

            return InMemoryTaskStore()
        if backend == "firestore":
            from tasknest.infrastructure.firebase import create_firestore_client
            from tasknest.infrastructure.firebase.repositories import (
                FirestoreTaskStore,
            )

            return FirestoreTaskStore(
                client_factory=lambda: create_firestore_client(s),
                collection=s.firestore_tasks_collection,
            )
        if backend == "postgres":
            from tasknest.infrastructure.persistence.repositories import SqlTaskStore

            if not s.database_url:
                raise ValueError("DATABASE_URL required for postgres backend")
            return SqlTaskStore(
                s.database_url,
                echo=s.database_echo,
                pool_size=s.db_pool_size,
                max_overflow=s.db_max_overflow,
            )
        raise ValueError(
            f"Unknown database backend: {backend}. Supported: 'memory', 'firestore', 'postgres'"
        )


def create_task_store(settings: "Settings | None" = None) -> ITaskStore:
    """Shortcut for TaskStoreFactory.create_task_store."""
    return TaskStoreFactory.create_task_store(settings)
