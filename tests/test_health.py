"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("database") in {"ok", "error", "not_configured"}


async def test_response_carries_request_id(client: AsyncClient) -> None:
    """Every response echoes X-Request-ID; a client-supplied id is kept."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("X-Request-ID") == "abc-123"

    generated = await client.get("/api/v1/health")
    assert generated.headers.get("X-Request-ID")


async def test_unknown_route_uses_error_envelope(client: AsyncClient) -> None:
    response = await client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "HTTP_ERROR"
    assert "message" in body
