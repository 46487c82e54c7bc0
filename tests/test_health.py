"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_request_id_is_generated(client: AsyncClient) -> None:
    """Responses carry an X-Request-ID even when the client sends none."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("x-request-id")


async def test_request_id_is_forwarded(client: AsyncClient) -> None:
    """A safe client-provided X-Request-ID is echoed back."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("x-request-id") == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    """A request id with unsafe characters is replaced by a generated one."""
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "not/safe;id"}
    )
    request_id = response.headers.get("x-request-id")
    assert request_id
    assert request_id != "not/safe;id"
