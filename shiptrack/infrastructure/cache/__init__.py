"""Cache: Redis service and session registry.

Key format lives in shiptrack.core.cache_keys; CacheService and SessionRegistry
are created in the app lifespan and shared through app.state.
"""

from shiptrack.infrastructure.cache.redis_cache import CacheService
from shiptrack.infrastructure.cache.session_registry import SessionRegistry

__all__ = [
    "CacheService",
    "SessionRegistry",
]
