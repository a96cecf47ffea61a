"""Tests for order endpoints: ownership, tracking cache and status lifecycle."""

import pytest
from httpx import AsyncClient

API = "/api/v1"

NEW_ORDER = {
    "sender_name": "Alice Sender",
    "recipient_name": "Bob Recipient",
    "origin": "Lagos",
    "destination": "Nairobi",
}


@pytest.fixture
async def alice(sign_up) -> dict:
    return await sign_up("alice@example.com", name="Alice")


@pytest.fixture
async def admin(sign_up) -> dict:
    return await sign_up("admin@example.com", name="Admin", admin=True)


async def _create(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post(f"{API}/orders", json={**NEW_ORDER, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_order(client: AsyncClient, alice: dict) -> None:
    order = await _create(client, alice["headers"])

    assert order["status"] == "PENDING"
    assert order["user_id"] == alice["user"]["id"]
    assert order["tracking_number"].startswith("TRK-")


async def test_create_order_requires_auth(client: AsyncClient) -> None:
    response = await client.post(f"{API}/orders", json=NEW_ORDER)
    assert response.status_code == 401


async def test_create_order_validation(client: AsyncClient, alice: dict) -> None:
    response = await client.post(
        f"{API}/orders", json={**NEW_ORDER, "origin": ""}, headers=alice["headers"]
    )
    assert response.status_code == 422


async def test_list_is_scoped_to_owner(client: AsyncClient, alice: dict, sign_up, admin: dict) -> None:
    bob = await sign_up("bob@example.com", name="Bob")
    await _create(client, alice["headers"])
    await _create(client, alice["headers"], sender_name="Acme Corp")
    await _create(client, bob["headers"])

    own = (await client.get(f"{API}/orders", headers=alice["headers"])).json()
    filtered = (
        await client.get(f"{API}/orders", params={"sender_name": "acme"}, headers=alice["headers"])
    ).json()
    everyone = (await client.get(f"{API}/orders", headers=admin["headers"])).json()

    assert own["meta"]["total"] == 2
    assert {o["user_id"] for o in own["data"]} == {alice["user"]["id"]}
    assert own["data"][0]["user"]["email"] == "alice@example.com"
    assert filtered["meta"]["total"] == 1
    assert everyone["meta"]["total"] == 3


async def test_list_pagination_bounds(client: AsyncClient, alice: dict) -> None:
    for _ in range(3):
        await _create(client, alice["headers"])

    page = await client.get(f"{API}/orders", params={"page": 2, "limit": 2}, headers=alice["headers"])

    assert page.status_code == 200
    assert page.json()["meta"] == {"total": 3, "page": 2, "limit": 2, "total_pages": 2}
    assert len(page.json()["data"]) == 1
    too_big = await client.get(f"{API}/orders", params={"limit": 101}, headers=alice["headers"])
    assert too_big.status_code == 422


async def test_foreign_order_is_not_found(client: AsyncClient, alice: dict, sign_up) -> None:
    bob = await sign_up("bob@example.com", name="Bob")
    order = await _create(client, alice["headers"])

    foreign = await client.get(f"{API}/orders/{order['id']}", headers=bob["headers"])
    missing = await client.get(f"{API}/orders/does-not-exist", headers=bob["headers"])
    cancel = await client.patch(f"{API}/orders/{order['id']}/cancel", headers=bob["headers"])

    assert foreign.status_code == missing.status_code == cancel.status_code == 404
    assert foreign.json()["message"] == missing.json()["message"]
    assert (await client.get(f"{API}/orders/{order['id']}", headers=alice["headers"])).status_code == 200


async def test_track_is_public_and_cached(client: AsyncClient, alice: dict, redis_client) -> None:
    order = await _create(client, alice["headers"])
    number = order["tracking_number"]

    response = await client.get(f"{API}/orders/track/{number}")

    assert response.status_code == 200
    assert response.json()["id"] == order["id"]
    assert await redis_client.exists(f"order:tracking:{number}") == 1


async def test_track_unknown_number(client: AsyncClient, redis_client) -> None:
    response = await client.get(f"{API}/orders/track/TRK-NOPE-000000")

    assert response.status_code == 404
    assert await redis_client.exists("order:tracking:TRK-NOPE-000000") == 0
    assert (await client.get(f"{API}/orders/track/bad*number")).status_code == 422


async def test_status_update_requires_admin(client: AsyncClient, alice: dict) -> None:
    order = await _create(client, alice["headers"])

    response = await client.patch(
        f"{API}/orders/{order['id']}/status",
        json={"status": "IN_TRANSIT"},
        headers=alice["headers"],
    )

    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_admin_lifecycle_evicts_tracking_cache(
    client: AsyncClient, alice: dict, admin: dict, redis_client
) -> None:
    order = await _create(client, alice["headers"])
    number = order["tracking_number"]
    await client.get(f"{API}/orders/track/{number}")

    in_transit = await client.patch(
        f"{API}/orders/{order['id']}/status", json={"status": "IN_TRANSIT"}, headers=admin["headers"]
    )

    assert in_transit.status_code == 200
    assert in_transit.json()["status"] == "IN_TRANSIT"
    assert await redis_client.exists(f"order:tracking:{number}") == 0
    tracked = await client.get(f"{API}/orders/track/{number}")
    assert tracked.json()["status"] == "IN_TRANSIT"

    delivered = await client.patch(
        f"{API}/orders/{order['id']}/status", json={"status": "DELIVERED"}, headers=admin["headers"]
    )
    assert delivered.json()["status"] == "DELIVERED"

    again = await client.patch(
        f"{API}/orders/{order['id']}/status", json={"status": "IN_TRANSIT"}, headers=admin["headers"]
    )
    assert again.status_code == 400
    assert again.json()["error"] == "INVALID_TRANSITION"


async def test_skipping_a_state_is_rejected(client: AsyncClient, alice: dict, admin: dict) -> None:
    order = await _create(client, alice["headers"])

    response = await client.patch(
        f"{API}/orders/{order['id']}/status", json={"status": "DELIVERED"}, headers=admin["headers"]
    )

    assert response.status_code == 400
    assert response.json()["details"]["current_status"] == "PENDING"
    current = await client.get(f"{API}/orders/{order['id']}", headers=alice["headers"])
    assert current.json()["status"] == "PENDING"


async def test_owner_cancels_pending_order(client: AsyncClient, alice: dict, admin: dict) -> None:
    first = await _create(client, alice["headers"])
    second = await _create(client, alice["headers"])
    await client.patch(
        f"{API}/orders/{second['id']}/status", json={"status": "IN_TRANSIT"}, headers=admin["headers"]
    )

    canceled = await client.patch(f"{API}/orders/{first['id']}/cancel", headers=alice["headers"])
    refused = await client.patch(f"{API}/orders/{second['id']}/cancel", headers=alice["headers"])

    assert canceled.status_code == 200
    assert canceled.json()["status"] == "CANCELED"
    assert refused.status_code == 400
    assert refused.json()["message"] == "Only pending orders can be canceled"


async def test_evict_tracking_cache(client: AsyncClient, alice: dict, admin: dict) -> None:
    order = await _create(client, alice["headers"])
    await client.get(f"{API}/orders/track/{order['tracking_number']}")

    assert (await client.delete(f"{API}/orders/cache", headers=alice["headers"])).status_code == 403
    response = await client.delete(f"{API}/orders/cache", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json() == {"evicted": 1}


async def test_list_date_range(client: AsyncClient, alice: dict) -> None:
    await _create(client, alice["headers"])

    inside = await client.get(
        f"{API}/orders", params={"date_from": "2000-01-01T00:00:00Z"}, headers=alice["headers"]
    )
    inverted = await client.get(
        f"{API}/orders",
        params={"date_from": "2030-01-02T00:00:00Z", "date_to": "2030-01-01T00:00:00Z"},
        headers=alice["headers"],
    )

    assert inside.json()["meta"]["total"] == 1
    assert inverted.status_code == 400
    assert inverted.json()["error"] == "VALIDATION_ERROR"
