"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json().get("status") == "ok"


async def test_readiness_checks_database(client: AsyncClient) -> None:
    """GET /api/v1/health/ready answers 200 when the database responds."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_request_id_is_generated(client: AsyncClient) -> None:
    """Responses carry a generated X-Request-ID when the client sends none."""
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")


async def test_safe_request_id_is_forwarded(client: AsyncClient) -> None:
    """A well-formed client request id is echoed back unchanged."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123_x"})
    assert response.headers["X-Request-ID"] == "abc-123_x"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    """A request id with unsafe characters is replaced, not logged or echoed."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id!"})
    assert response.headers["X-Request-ID"] != "bad id!"
    assert " " not in response.headers["X-Request-ID"]
