"""Redis-based cache service.

Async key-value store with TTL, pattern eviction and a read-through helper.
Holds no domain semantics: order and session namespaces are owned by their
services and built with shiptrack.core.cache_keys.

Failure policy: reads are forgiving (a failed or malformed read is a miss,
which forces a recompute), writes and deletes are not (they raise
StoreUnavailableException so stale entries are observable).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff

from shiptrack.core.config import Settings, get_settings
from shiptrack.core.constants import CacheTTL
from shiptrack.domain.exceptions import StoreUnavailableException

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STORE = "cache"
_CONNECT_RETRIES = 3


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown; the instance is
    shared process-wide through app.state and injected into services.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        default_ttl: int = CacheTTL.MEDIUM,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            default_ttl: TTL in seconds used when set() is called without one.
        """
        self.redis = redis_client
        self.default_ttl = int(default_ttl)

    async def connect(self, settings: Settings | None = None) -> None:
        """Create the Redis client and ping it. Call on app startup.

        A failed ping is logged, not raised: the client keeps its pool and
        reconnects on demand, and every later write surfaces the outage.
        """
        if self.redis is not None:
            return
        settings = settings or get_settings()
        options = settings.redis_connection_options()
        self.redis = redis.Redis(
            host=options.host,
            port=options.port,
            db=settings.redis_db,
            password=options.password,
            ssl=options.tls,
            decode_responses=True,
            socket_connect_timeout=settings.redis_socket_timeout,
            socket_timeout=settings.redis_socket_timeout,
            socket_keepalive=True,
            max_connections=settings.redis_max_connections,
            retry=Retry(ExponentialBackoff(cap=3.0, base=0.1), _CONNECT_RETRIES),
            retry_on_error=[redis.ConnectionError, redis.TimeoutError],
        )
        try:
            await self.redis.ping()
            logger.info("Redis cache connected: %s:%s", options.host, options.port)
        except redis.RedisError as e:
            logger.warning(
                "Redis not reachable at startup (%s:%s): %s",
                options.host,
                options.port,
                e,
            )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if a Redis client is configured."""
        return self.redis is not None

    @property
    def client(self) -> redis.Redis:
        """Underlying Redis client; raises StoreUnavailableException when not connected."""
        if self.redis is None:
            raise StoreUnavailableException(_STORE, "connect", "Redis client not initialized")
        return self.redis

    async def ping(self) -> bool:
        """Round-trip PING. Raises StoreUnavailableException on failure."""
        try:
            return bool(await self.client.ping())
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "ping", str(e)) from e

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unreadable.

        Args:
            key: Cache key (use shiptrack.core.cache_keys builders).

        Returns:
            Cached value or None.
        """
        if self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except redis.RedisError:
            logger.warning("Cache get error for key %s; treating as miss", key, exc_info=True)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Cache payload for key %s is malformed; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store value with TTL (seconds; default_ttl when omitted or 0).

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds.

        Raises:
            StoreUnavailableException: If Redis rejects or cannot receive the write.
        """
        expiry = int(ttl) if ttl else self.default_ttl
        serialized = json.dumps(value)
        try:
            await self.client.set(key, serialized, ex=expiry)
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "set", str(e)) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, expiry)

    async def delete(self, key: str) -> None:
        """Remove key from cache. Missing keys are not an error.

        Raises:
            StoreUnavailableException: If Redis cannot be reached.
        """
        try:
            await self.client.delete(key)
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "delete", str(e)) from e
        logger.debug("Cache DELETE: %s", key)

    async def exists(self, key: str) -> bool:
        """Return True if key is present.

        Raises:
            StoreUnavailableException: If Redis cannot be reached.
        """
        try:
            return await self.client.exists(key) == 1
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "exists", str(e)) from e

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Intended for bulk invalidation, not hot paths.

        Args:
            pattern: Redis SCAN match pattern (e.g. order:tracking:*).

        Returns:
            Number of keys deleted.

        Raises:
            StoreUnavailableException: If Redis cannot be reached.
        """
        chunk_size = 500
        deleted = 0
        client = self.client
        try:
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern, count=chunk_size):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += int(await client.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await client.unlink(*chunk) or 0)
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "delete_pattern", str(e)) from e
        if deleted > 0:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: int | None = None,
    ) -> T:
        """Read-through: return the cached value, else compute, store and return it.

        If factory raises, nothing is cached and the exception propagates
        (negative results are never cached). Two concurrent misses may both
        run factory; the last write wins.
        """
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await factory()
        await self.set(key, value, ttl)
        return value
