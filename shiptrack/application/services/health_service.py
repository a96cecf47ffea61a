"""Health checks: database SELECT 1 and a cache write/read round trip."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from shiptrack.application.dtos.health import DependencyStatus, HealthReport
from shiptrack.application.interfaces.services import ICacheService
from shiptrack.domain.exceptions import StoreUnavailableException
from shiptrack.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

HEALTH_CHECK_KEY = "health_check"
_HEALTH_CHECK_VALUE = "ok"
_HEALTH_CHECK_TTL = 10

_started_at = time.monotonic()


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class HealthService:
    """Probe the relational store and the cache.

    db_probe must raise StoreUnavailableException when the database is down.
    A missing cache (Redis disabled) is reported as 'disabled' and does not
    make the service unhealthy.
    """

    def __init__(
        self,
        db_probe: Callable[[], Awaitable[None]],
        cache: ICacheService | None = None,
    ) -> None:
        self._db_probe = db_probe
        self._cache = cache

    async def _check_database(self) -> DependencyStatus:
        start = time.perf_counter()
        try:
            await self._db_probe()
        except StoreUnavailableException as e:
            logger.warning("Database health check failed: %s", e.message)
            return DependencyStatus(status="down", error=e.details.get("reason", e.message))
        return DependencyStatus(status="up", latency_ms=_elapsed_ms(start))

    async def _check_cache(self) -> DependencyStatus:
        if self._cache is None:
            return DependencyStatus(status="disabled")
        start = time.perf_counter()
        try:
            await self._cache.set(HEALTH_CHECK_KEY, _HEALTH_CHECK_VALUE, _HEALTH_CHECK_TTL)
            value = await self._cache.get(HEALTH_CHECK_KEY)
        except StoreUnavailableException as e:
            logger.warning("Cache health check failed: %s", e.message)
            return DependencyStatus(status="down", error=e.details.get("reason", e.message))
        if value != _HEALTH_CHECK_VALUE:
            return DependencyStatus(status="down", error="Cache read/write check failed")
        return DependencyStatus(status="up", latency_ms=_elapsed_ms(start))

    async def check_health(self) -> HealthReport:
        database = await self._check_database()
        cache = await self._check_cache()
        healthy = database.is_up and cache.status in ("up", "disabled")
        return HealthReport(
            status="healthy" if healthy else "unhealthy",
            timestamp=utc_now(),
            uptime_seconds=int(time.monotonic() - _started_at),
            database=database,
            cache=cache,
        )

    async def is_ready(self) -> bool:
        return (await self.check_health()).is_healthy
