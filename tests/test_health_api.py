"""Health probes and service root."""


async def test_liveness(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "testing"


async def test_readiness(client):
    response = await client.get("/health/ready")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ready"
    assert body["database"]["status"] == "healthy"
    assert body["realtime_connections"] == 0


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["api_base"] == "/api"


async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
