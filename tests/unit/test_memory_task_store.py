"""InMemoryTaskStore: owner scoping, ordering, partial updates, timestamps."""

from datetime import UTC, datetime, timedelta

from tasknest.application.dtos import NewTask
from tasknest.domain.enums import TaskPriority, TaskStatus
from tasknest.infrastructure.memory import InMemoryTaskStore

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _new(owner_id: str = "u1", title: str = "Task", **kwargs) -> NewTask:
    kwargs.setdefault("status", TaskStatus.TODO)
    kwargs.setdefault("priority", TaskPriority.MEDIUM)
    return NewTask(owner_id=owner_id, title=title, **kwargs)


async def test_insert_assigns_id_and_timestamps() -> None:
    clock = FrozenClock()
    store = InMemoryTaskStore(clock=clock)
    task = await store.insert(_new(labels=("a",)))
    assert task.id
    assert task.owner_id == "u1"
    assert task.created_at == T0
    assert task.updated_at == T0
    assert task.labels == ("a",)


async def test_find_by_owner_is_owner_scoped_and_newest_first() -> None:
    clock = FrozenClock()
    store = InMemoryTaskStore(clock=clock)
    first = await store.insert(_new(title="first"))
    clock.now = T0 + timedelta(minutes=1)
    second = await store.insert(_new(title="second"))
    await store.insert(_new(owner_id="u2", title="other"))

    tasks = await store.find_by_owner("u1")
    assert [t.id for t in tasks] == [second.id, first.id]


async def test_equal_created_at_orders_by_insertion() -> None:
    """Tasks created in the same instant still list newest insert first."""
    store = InMemoryTaskStore(clock=FrozenClock())
    a = await store.insert(_new(title="a"))
    b = await store.insert(_new(title="b"))
    assert [t.id for t in await store.find_by_owner("u1")] == [b.id, a.id]


async def test_status_filter() -> None:
    store = InMemoryTaskStore()
    await store.insert(_new(title="open"))
    done = await store.insert(_new(title="done", status=TaskStatus.COMPLETED))
    tasks = await store.find_by_owner("u1", TaskStatus.COMPLETED)
    assert [t.id for t in tasks] == [done.id]


async def test_other_owner_sees_nothing() -> None:
    """Owner mismatch is indistinguishable from absence."""
    store = InMemoryTaskStore()
    task = await store.insert(_new())
    assert await store.find_one(task.id, "u2") is None
    assert await store.update_fields(task.id, "u2", {"title": "hijack"}) is None
    assert await store.delete(task.id, "u2") is None
    assert (await store.find_one(task.id, "u1")).title == "Task"


async def test_update_fields_changes_only_given_fields() -> None:
    clock = FrozenClock()
    store = InMemoryTaskStore(clock=clock)
    task = await store.insert(_new(description="keep me"))
    clock.now = T0 + timedelta(seconds=5)
    updated = await store.update_fields(task.id, "u1", {"status": TaskStatus.IN_PROGRESS})
    assert updated.status is TaskStatus.IN_PROGRESS
    assert updated.description == "keep me"
    assert updated.created_at == T0
    assert updated.updated_at == T0 + timedelta(seconds=5)


async def test_updated_at_strictly_increases_with_frozen_clock() -> None:
    store = InMemoryTaskStore(clock=FrozenClock())
    task = await store.insert(_new())
    one = await store.update_fields(task.id, "u1", {"title": "one"})
    two = await store.update_fields(task.id, "u1", {"title": "two"})
    assert task.updated_at < one.updated_at < two.updated_at


async def test_delete_returns_record_once() -> None:
    store = InMemoryTaskStore()
    task = await store.insert(_new())
    deleted = await store.delete(task.id, "u1")
    assert deleted == task
    assert await store.delete(task.id, "u1") is None
    assert await store.find_by_owner("u1") == []


async def test_connect_and_close_are_idempotent() -> None:
    store = InMemoryTaskStore()
    await store.connect()
    await store.connect()
    await store.close()
    await store.close()
