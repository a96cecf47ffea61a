"""Fixtures for HTTP tests: sign-up through the API and admin promotion."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

from shiptrack.domain.enums import UserRole
from shiptrack.infrastructure.persistence.repositories import UserRepository

PASSWORD = "secret123"


@pytest.fixture
def sign_up(client: AsyncClient, session_factory) -> Callable[..., Awaitable[dict]]:
    """Register a user through the API; admin=True promotes it in the database.

    Returns the register response body plus a ready-made "headers" entry.
    """

    async def _sign_up(email: str, name: str = "Test User", admin: bool = False) -> dict:
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": PASSWORD, "name": name},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        if admin:
            async with session_factory() as session, session.begin():
                await UserRepository(session).update_role(body["user"]["id"], UserRole.ADMIN)
        body["headers"] = {"Authorization": f"Bearer {body['access_token']}"}
        return body

    return _sign_up
