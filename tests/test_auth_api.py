"""Registration, login and the error envelope."""

from tests.conftest import PASSWORD, auth_headers, login, register_and_login


async def test_register_and_me(client):
    session = await register_and_login(client, "Jane@Example.com", name="Jane")

    assert session["user"]["email"] == "jane@example.com"
    assert session["user"]["role"] == "customer"
    assert "password_hash" not in session["user"]

    response = await client.get("/api/auth/me", headers=session["headers"])
    assert response.status_code == 200
    assert response.json()["name"] == "Jane"


async def test_duplicate_email_is_rejected(client):
    await register_and_login(client, "dup@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"name": "Again", "email": "DUP@example.com", "password": PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"


async def test_admin_cannot_self_register(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Mallory", "email": "mallory@example.com", "password": PASSWORD, "role": "admin"},
    )

    assert response.status_code == 403


async def test_wrong_password(client):
    await register_and_login(client, "someone@example.com")

    response = await client.post("/api/auth/login", json={"email": "someone@example.com", "password": "nope12345"})

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "AUTHENTICATION_ERROR"
    assert error["message"] == "Invalid credentials"


async def test_validation_errors_use_envelope(client):
    response = await client.post("/api/auth/register", json={"name": "", "email": "not-an-email", "password": "short"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    fields = {entry["field"] for entry in error["details"]["errors"]}
    assert "email" in fields
    assert "password" in fields


async def test_missing_token(client):
    response = await client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_invalid_token(client):
    response = await client.get("/api/auth/me", headers=auth_headers("not-a-jwt"))

    assert response.status_code == 401
    body = response.json()
    assert body["error"]["code"] == "AUTHENTICATION_ERROR"
    assert "timestamp" in body["error"]


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


async def test_admin_login(client, admin):
    assert admin["user"]["role"] == "admin"
    again = await login(client, "admin@example.com")
    assert again["user"]["id"] == admin["user"]["id"]
