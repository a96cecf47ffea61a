"""Tests for auth endpoints: register, login, logout and sessions."""

from httpx import AsyncClient

API = "/api/v1"
PASSWORD = "secret123"


async def test_register_returns_token_and_user(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/auth/register",
        json={"email": "alice@example.com", "password": PASSWORD, "name": "Alice"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["role"] == "USER"
    assert "hashed_password" not in body["user"]


async def test_register_duplicate_email_conflicts(client: AsyncClient, sign_up) -> None:
    await sign_up("alice@example.com")

    response = await client.post(
        f"{API}/auth/register",
        json={"email": "alice@example.com", "password": PASSWORD, "name": "Alice"},
    )

    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


async def test_register_validation(client: AsyncClient) -> None:
    response = await client.post(
        f"{API}/auth/register",
        json={"email": "not-an-email", "password": "123", "name": "A"},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_login(client: AsyncClient, sign_up) -> None:
    registered = await sign_up("alice@example.com")

    response = await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == registered["user"]["id"]
    assert body["access_token"] != registered["access_token"]


async def test_login_wrong_password(client: AsyncClient, sign_up) -> None:
    await sign_up("alice@example.com")

    wrong = await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": "wrong-pw"}
    )
    unknown = await client.post(
        f"{API}/auth/login", json={"email": "bob@example.com", "password": PASSWORD}
    )

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["message"] == unknown.json()["message"] == "Invalid credentials"
    assert wrong.headers["WWW-Authenticate"] == "Bearer"


async def test_me_requires_token(client: AsyncClient, sign_up) -> None:
    alice = await sign_up("alice@example.com", name="Alice")

    assert (await client.get(f"{API}/auth/me")).status_code == 401
    assert (
        await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})
    ).status_code == 401

    response = await client.get(f"{API}/auth/me", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == {
        "id": alice["user"]["id"],
        "email": "alice@example.com",
        "name": "Alice",
        "role": "USER",
    }


async def test_logout_revokes_only_that_token(client: AsyncClient, sign_up) -> None:
    first = await sign_up("alice@example.com")
    login = await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    second_headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = await client.post(f"{API}/auth/logout", headers=first["headers"])

    assert response.status_code == 204
    revoked = await client.get(f"{API}/auth/me", headers=first["headers"])
    assert revoked.status_code == 401
    assert revoked.json()["error"] == "AUTHENTICATION_ERROR"
    assert (await client.get(f"{API}/auth/me", headers=second_headers)).status_code == 200


async def test_logout_all(client: AsyncClient, sign_up) -> None:
    first = await sign_up("alice@example.com")
    await client.post(
        f"{API}/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )

    response = await client.post(f"{API}/auth/logout-all", headers=first["headers"])

    assert response.status_code == 200
    assert response.json() == {"sessions_ended": 2}
    assert (await client.get(f"{API}/auth/me", headers=first["headers"])).status_code == 401


async def test_sessions_listing(client: AsyncClient, sign_up, redis_client) -> None:
    alice = await sign_up("alice@example.com")

    response = await client.get(f"{API}/auth/sessions", headers=alice["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["sessions"][0]["user_id"] == alice["user"]["id"]
    assert body["sessions"][0]["role"] == "USER"
    assert await redis_client.exists(f"session:{alice['access_token']}") == 1


async def test_session_store_outage_is_503(client: AsyncClient, sign_up, redis_server) -> None:
    alice = await sign_up("alice@example.com")
    redis_server.connected = False

    response = await client.get(f"{API}/auth/me", headers=alice["headers"])

    assert response.status_code == 503
    assert response.json()["error"] == "STORE_UNAVAILABLE"
