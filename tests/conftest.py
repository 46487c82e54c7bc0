"""Pytest configuration and fixtures for tasknest.

HTTP tests run the FastAPI app in-process (httpx ASGITransport) over an
injected InMemoryTaskStore. Environment is set before any tasknest import so
get_settings() validates with test values.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tasknest-tests-only")
os.environ["DATABASE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from tasknest.core.config import get_settings  # noqa: E402
from tasknest.infrastructure.memory import InMemoryTaskStore  # noqa: E402
from tasknest.infrastructure.security.jwt import create_access_token  # noqa: E402
from tasknest.main import create_app  # noqa: E402

OWNER_ID = "user-alice"
OTHER_OWNER_ID = "user-bob"


class RecordingNotifier:
    """Notifier that keeps messages for assertions."""

    def __init__(self) -> None:
        self.successes: list[str] = []
        self.errors: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store() -> InMemoryTaskStore:
    """Fresh in-memory task store per test."""
    return InMemoryTaskStore()


@pytest.fixture
def app(store: InMemoryTaskStore) -> FastAPI:
    """FastAPI app serving from the test store."""
    get_settings.cache_clear()
    return create_app(task_store=store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_headers() -> Callable[[str], dict[str, str]]:
    """Return a function building bearer headers for an owner id."""

    def _make(owner_id: str) -> dict[str, str]:
        token = create_access_token(owner_id)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def auth_headers(make_headers: Callable[[str], dict[str, str]]) -> dict[str, str]:
    """Bearer headers for OWNER_ID."""
    return make_headers(OWNER_ID)
