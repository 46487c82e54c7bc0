"""SqlTaskStore against a real Postgres (DATABASE_URL, asyncpg driver)."""

import os
from datetime import date

import pytest

from tasknest.application.dtos import NewTask
from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.infrastructure.persistence.repositories import SqlTaskStore
from tasknest.shared.utils.generators import generate_cuid

pytestmark = pytest.mark.requires_db


@pytest.fixture
async def sql_store() -> SqlTaskStore:
    url = os.environ.get("TEST_DATABASE_URL") or os.environ.get("DATABASE_URL")
    if not url or not url.startswith("postgresql"):
        pytest.skip("DATABASE_URL (postgresql+asyncpg://...) not set")
    store = SqlTaskStore(url)
    await store.connect()
    yield store
    await store.close()


@pytest.fixture
async def owner_id(sql_store: SqlTaskStore) -> str:
    owner = f"it-{generate_cuid()}"
    yield owner
    for task in await sql_store.find_by_owner(owner):
        await sql_store.delete(task.id, owner)


def _new(owner_id: str, title: str, **kwargs) -> NewTask:
    kwargs.setdefault("status", TaskStatus.TODO)
    kwargs.setdefault("priority", TaskPriority.MEDIUM)
    return NewTask(owner_id=owner_id, title=title, **kwargs)


async def test_insert_find_update_delete(sql_store: SqlTaskStore, owner_id: str) -> None:
    created = await sql_store.insert(
        _new(owner_id, "Ship it", due_date=date(2026, 11, 1), labels=("release",))
    )
    assert await sql_store.find_one(created.id, owner_id) == created
    assert await sql_store.find_one(created.id, "someone-else") is None
    assert await sql_store.update_fields(created.id, "someone-else", {"title": "x"}) is None
    assert await sql_store.delete(created.id, "someone-else") is None
    assert (await sql_store.find_one(created.id, owner_id)).title == "Ship it"

    updated = await sql_store.update_fields(
        created.id, owner_id, {"status": TaskStatus.COMPLETED, "labels": ()}
    )
    assert updated.status is TaskStatus.COMPLETED
    assert updated.labels == ()
    assert updated.title == "Ship it"
    assert updated.updated_at > created.updated_at

    deleted = await sql_store.delete(created.id, owner_id)
    assert deleted.id == created.id
    assert await sql_store.delete(created.id, owner_id) is None


async def test_find_by_owner_orders_newest_first(sql_store: SqlTaskStore, owner_id: str) -> None:
    first = await sql_store.insert(_new(owner_id, "first"))
    second = await sql_store.insert(_new(owner_id, "second", status=TaskStatus.IN_PROGRESS))

    ids = [t.id for t in await sql_store.find_by_owner(owner_id)]
    assert set(ids) == {first.id, second.id}
    assert ids[0] == second.id or first.created_at == second.created_at
    in_progress = await sql_store.find_by_owner(owner_id, TaskStatus.IN_PROGRESS)
    assert [t.id for t in in_progress] == [second.id]
