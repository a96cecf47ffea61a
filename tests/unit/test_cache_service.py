"""Tests for CacheService against fakeredis."""

import json
import warnings

import pytest

from shiptrack.domain.exceptions import StoreUnavailableException
from shiptrack.infrastructure.cache import CacheService


async def test_set_then_get_returns_value(cache: CacheService) -> None:
    await cache.set("k", {"a": 1, "b": [1, 2]}, ttl=60)
    assert await cache.get("k") == {"a": 1, "b": [1, 2]}


async def test_get_missing_returns_none(cache: CacheService) -> None:
    assert await cache.get("missing") is None


async def test_set_applies_ttl(cache: CacheService, redis_client) -> None:
    await cache.set("k", "v", ttl=120)
    ttl = await redis_client.ttl("k")
    assert 0 < ttl <= 120


async def test_set_without_ttl_uses_default(redis_client) -> None:
    cache = CacheService(redis_client=redis_client, default_ttl=42)
    await cache.set("k", "v")
    ttl = await redis_client.ttl("k")
    assert 0 < ttl <= 42


async def test_set_overwrites_value_and_ttl(cache: CacheService, redis_client) -> None:
    await cache.set("k", "old", ttl=1000)
    await cache.set("k", "new", ttl=30)
    assert await cache.get("k") == "new"
    assert await redis_client.ttl("k") <= 30


async def test_set_emits_no_deprecation_warning(cache: CacheService) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        await cache.set("k", {"a": 1}, ttl=60)
    assert await cache.get("k") == {"a": 1}


async def test_malformed_payload_is_a_miss(cache: CacheService, redis_client) -> None:
    await redis_client.set("k", "{not json")
    assert await cache.get("k") is None


async def test_delete_and_exists(cache: CacheService) -> None:
    await cache.set("k", 1, ttl=60)
    assert await cache.exists("k") is True
    await cache.delete("k")
    assert await cache.exists("k") is False
    await cache.delete("k")


async def test_delete_pattern_removes_only_matching(cache: CacheService) -> None:
    for i in range(3):
        await cache.set(f"order:tracking:TRK-{i}", {"i": i}, ttl=60)
    await cache.set("session:tok", {"x": 1}, ttl=60)

    deleted = await cache.delete_pattern("order:tracking:*")

    assert deleted == 3
    assert await cache.get("order:tracking:TRK-0") is None
    assert await cache.get("session:tok") == {"x": 1}


async def test_delete_pattern_no_match_returns_zero(cache: CacheService) -> None:
    assert await cache.delete_pattern("nothing:*") == 0


async def test_get_or_set_computes_once(cache: CacheService) -> None:
    calls = 0

    async def factory() -> dict:
        nonlocal calls
        calls += 1
        return {"value": calls}

    first = await cache.get_or_set("k", factory, ttl=60)
    second = await cache.get_or_set("k", factory, ttl=60)

    assert first == {"value": 1}
    assert second == {"value": 1}
    assert calls == 1


async def test_get_or_set_factory_error_caches_nothing(cache: CacheService) -> None:
    class Boom(Exception):
        pass

    async def factory() -> dict:
        raise Boom()

    with pytest.raises(Boom):
        await cache.get_or_set("k", factory, ttl=60)
    assert await cache.exists("k") is False


async def test_values_are_stored_as_json(cache: CacheService, redis_client) -> None:
    await cache.set("k", {"status": "PENDING"}, ttl=60)
    assert json.loads(await redis_client.get("k")) == {"status": "PENDING"}


async def test_outage_read_is_miss_write_raises(cache: CacheService, redis_server) -> None:
    redis_server.connected = False

    assert await cache.get("k") is None
    with pytest.raises(StoreUnavailableException) as exc_info:
        await cache.set("k", 1, ttl=60)
    assert exc_info.value.details["operation"] == "set"
    with pytest.raises(StoreUnavailableException):
        await cache.delete("k")
    with pytest.raises(StoreUnavailableException):
        await cache.delete_pattern("order:tracking:*")


async def test_unconnected_service() -> None:
    cache = CacheService()
    assert cache.is_available() is False
    assert await cache.get("k") is None
    with pytest.raises(StoreUnavailableException):
        await cache.set("k", 1)


async def test_ping(cache: CacheService, redis_server) -> None:
    assert await cache.ping() is True

    redis_server.connected = False
    with pytest.raises(StoreUnavailableException):
        await cache.ping()
