"""Health check endpoint tests."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data == {"status": "ok", "db": "ok", "version": "0.1.0"}


async def test_responses_carry_request_id(client: AsyncClient):
    response = await client.get("/api/health")
    assert response.headers["X-Request-Id"]


async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/api/health", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"
