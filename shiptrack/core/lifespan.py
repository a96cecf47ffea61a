"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (database schema, Redis cache,
session registry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from shiptrack.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: database tables (if auto-create), Redis cache and session
    registry (if enabled). Shutdown order: cache disconnect, SQL engine dispose.
    """
    from shiptrack.infrastructure.persistence import database

    settings = get_settings()

    # ---- Startup ----
    if settings.database_auto_create:
        await database.init_models()

    if settings.redis_enabled:
        from shiptrack.infrastructure.cache import CacheService, SessionRegistry

        cache = CacheService(default_ttl=settings.cache_ttl)
        await cache.connect(settings)
        app.state.cache = cache
        app.state.session_registry = SessionRegistry(cache, session_ttl=settings.session_ttl)
    else:
        logger.warning("Redis disabled: tracking cache and session registry are off")
        app.state.cache = None
        app.state.session_registry = None

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    await database.dispose_engine()
