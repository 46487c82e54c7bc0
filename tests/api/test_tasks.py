"""Task API: routes, identity, and error-kind to status-code mapping."""

from collections.abc import Callable
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from tasknest.core.config import get_settings
from tasknest.domain.exceptions import StoreUnavailableException
from tasknest.main import create_app


async def _create(client: AsyncClient, headers: dict[str, str], **body) -> dict:
    body.setdefault("title", "Task")
    response = await client.post("/api/v1/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_returns_201_with_defaults(client: AsyncClient, auth_headers) -> None:
    data = await _create(client, auth_headers, title="  Buy milk  ", labels="home, errands")
    assert data["id"]
    assert data["owner_id"] == "user-alice"
    assert data["title"] == "Buy milk"
    assert data["status"] == "todo"
    assert data["priority"] == "medium"
    assert data["due_date"] is None
    assert data["labels"] == ["home", "errands"]
    assert data["created_at"] == data["updated_at"]


async def test_list_is_newest_first_and_filterable(client: AsyncClient, auth_headers) -> None:
    first = await _create(client, auth_headers, title="first")
    second = await _create(client, auth_headers, title="second", status="completed")

    response = await client.get("/api/v1/tasks", headers=auth_headers)
    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [second["id"], first["id"]]

    response = await client.get("/api/v1/tasks", params={"status": "completed"}, headers=auth_headers)
    assert [t["id"] for t in response.json()] == [second["id"]]

    response = await client.get("/api/v1/tasks", params={"status": "whatever"}, headers=auth_headers)
    assert len(response.json()) == 2


async def test_get_update_status_delete_flow(client: AsyncClient, auth_headers) -> None:
    task = await _create(client, auth_headers, description="draft")
    url = f"/api/v1/tasks/{task['id']}"

    response = await client.get(url, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["description"] == "draft"

    response = await client.patch(
        url, json={"priority": "high", "due_date": "2026-09-01"}, headers=auth_headers
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["priority"] == "high"
    assert updated["due_date"] == "2026-09-01"
    assert updated["description"] == "draft"
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(task["updated_at"])

    response = await client.put(f"{url}/status", json={"status": "in-progress"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "in-progress"

    response = await client.delete(url, headers=auth_headers)
    assert response.status_code == 204
    response = await client.delete(url, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_patch_can_clear_due_date(client: AsyncClient, auth_headers) -> None:
    task = await _create(client, auth_headers, due_date="2026-09-01")
    response = await client.patch(
        f"/api/v1/tasks/{task['id']}", json={"due_date": None}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["due_date"] is None


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-jwt"}, {"Authorization": "Basic abc"}],
)
async def test_missing_or_invalid_identity_is_401(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/tasks", headers=headers)
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    response = await client.post("/api/v1/tasks", json={"title": "x"}, headers=headers)
    assert response.status_code == 401


async def test_validation_failure_is_400_with_field(client: AsyncClient, auth_headers) -> None:
    response = await client.post("/api/v1/tasks", json={"title": "   "}, headers=auth_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["message"] == "Title is required"
    assert body["details"]["field"] == "title"

    response = await client.post(
        "/api/v1/tasks", json={"title": "x", "priority": "urgent"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "priority"


async def test_invalid_status_change_is_400(client: AsyncClient, auth_headers) -> None:
    task = await _create(client, auth_headers)
    response = await client.put(
        f"/api/v1/tasks/{task['id']}/status", json={"status": "archived"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "status"


async def test_request_schema_error_is_422(client: AsyncClient, auth_headers) -> None:
    response = await client.put("/api/v1/tasks/t1/status", json={}, headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_tasks_are_invisible_to_other_owners(
    client: AsyncClient, auth_headers, make_headers: Callable[[str], dict[str, str]]
) -> None:
    task = await _create(client, auth_headers, title="private")
    bob = make_headers("user-bob")
    url = f"/api/v1/tasks/{task['id']}"

    assert (await client.get("/api/v1/tasks", headers=bob)).json() == []
    assert (await client.get(url, headers=bob)).status_code == 404
    assert (await client.patch(url, json={"title": "mine"}, headers=bob)).status_code == 404
    assert (await client.put(f"{url}/status", json={"status": "completed"}, headers=bob)).status_code == 404
    assert (await client.delete(url, headers=bob)).status_code == 404
    assert (await client.get(url, headers=auth_headers)).json()["title"] == "private"


async def test_store_unavailable_is_503(auth_headers) -> None:
    store = AsyncMock()
    store.find_by_owner.side_effect = StoreUnavailableException("find_by_owner", "down")
    get_settings.cache_clear()
    app = create_app(task_store=store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/api/v1/tasks", headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["error"] == "STORE_UNAVAILABLE"


async def test_unhandled_error_is_500(auth_headers) -> None:
    store = AsyncMock()
    store.find_by_owner.side_effect = RuntimeError("boom")
    get_settings.cache_clear()
    app = create_app(task_store=store)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/v1/tasks", headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["error"] == "INTERNAL_ERROR"
