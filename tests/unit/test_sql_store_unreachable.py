"""SqlTaskStore failure wrapping when the database cannot be reached."""

import pytest

from tasknest.domain.exceptions import StoreUnavailableException
from tasknest.infrastructure.persistence.repositories import SqlTaskStore

# Port 1 on loopback refuses connections immediately.
UNREACHABLE_URL = "postgresql+asyncpg://u:p@127.0.0.1:1/tasks"


@pytest.fixture
async def unreachable_store() -> SqlTaskStore:
    store = SqlTaskStore(UNREACHABLE_URL)
    yield store
    await store.close()


async def test_connect_failure_is_store_unavailable(unreachable_store: SqlTaskStore) -> None:
    with pytest.raises(StoreUnavailableException) as exc_info:
        await unreachable_store.connect()
    assert exc_info.value.details["operation"] == "connect"


async def test_operations_surface_connect_failure(unreachable_store: SqlTaskStore) -> None:
    with pytest.raises(StoreUnavailableException):
        await unreachable_store.find_by_owner("u1")
    with pytest.raises(StoreUnavailableException):
        await unreachable_store.find_one("t1", "u1")
    with pytest.raises(StoreUnavailableException):
        await unreachable_store.delete("t1", "u1")


async def test_close_without_connection_is_noop(unreachable_store: SqlTaskStore) -> None:
    await unreachable_store.close()
    await unreachable_store.close()
