"""TaskStoreFactory backend selection."""

import pytest

from tasknest.core.config import Settings
from tasknest.infrastructure.factory import TaskStoreFactory, create_task_store
from tasknest.infrastructure.firebase.repositories import FirestoreTaskStore
from tasknest.infrastructure.memory import InMemoryTaskStore
from tasknest.infrastructure.persistence.repositories import SqlTaskStore

SECRET = "unit-test-secret"


def test_memory_backend() -> None:
    settings = Settings(secret_key=SECRET, database_backend="memory")
    assert isinstance(create_task_store(settings), InMemoryTaskStore)


def test_firestore_backend_is_created_without_connecting() -> None:
    settings = Settings(
        secret_key=SECRET,
        database_backend="firestore",
        firebase_service_account_path="/does/not/exist.json",
        firestore_tasks_collection="team_tasks",
    )
    store = TaskStoreFactory.create_task_store(settings)
    assert isinstance(store, FirestoreTaskStore)


def test_postgres_backend_is_created_without_connecting() -> None:
    settings = Settings(
        secret_key=SECRET,
        database_backend="postgres",
        database_url="postgresql+asyncpg://u:p@localhost:1/tasks",
    )
    assert isinstance(TaskStoreFactory.create_task_store(settings), SqlTaskStore)


def test_unknown_backend_after_load_is_rejected() -> None:
    settings = Settings(secret_key=SECRET, database_backend="memory")
    settings.database_backend = "mongo"
    with pytest.raises(ValueError, match="Unknown database backend"):
        TaskStoreFactory.create_task_store(settings)
