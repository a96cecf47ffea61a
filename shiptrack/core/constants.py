"""Core constants: cache key prefixes, TTL classes and shared literal values.

Single source of truth for cache key structure. Key shapes are shared with
other deployments using the same Redis, so prefixes must not change.
"""

from enum import IntEnum

# Cache key prefixes
CACHE_PREFIX_ORDER = "order"
CACHE_PREFIX_ORDER_TRACKING = "tracking"
CACHE_PREFIX_SESSION = "session"
CACHE_PREFIX_USER_SESSIONS = "user_sessions"
CACHE_PREFIX_BLACKLIST = "blacklist"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Sessions use a fixed 24h sliding window, independent of the generic TTL classes.
SESSION_TTL_SECONDS = 86400

# Value stored under blacklist:<token>
BLACKLIST_MARKER = "1"


class CacheTTL(IntEnum):
    """Generic TTL classes in seconds."""

    SHORT = 60
    MEDIUM = 300
    LONG = 3600
    DAY = 86400

# Order list pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
