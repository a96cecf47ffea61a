"""Cache key builders. Single place for key format.

Key shapes are shared with any deployment using the same Redis and must stay
bit-exact: order:tracking:<trackingNumber>, session:<token>,
user_sessions:<userId>, blacklist:<token>.

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from shiptrack.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_BLACKLIST,
    CACHE_PREFIX_ORDER,
    CACHE_PREFIX_ORDER_TRACKING,
    CACHE_PREFIX_SESSION,
    CACHE_PREFIX_USER_SESSIONS,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def order_tracking_key(tracking_number: str) -> str:
    """Cache key for an order looked up by tracking number."""
    _validate_key_component(tracking_number, "tracking_number")
    return (
        f"{CACHE_PREFIX_ORDER}{CACHE_KEY_SEP}{CACHE_PREFIX_ORDER_TRACKING}"
        f"{CACHE_KEY_SEP}{tracking_number}"
    )


def order_tracking_pattern() -> str:
    """SCAN pattern matching every tracking-number cache entry."""
    return f"{CACHE_PREFIX_ORDER}{CACHE_KEY_SEP}{CACHE_PREFIX_ORDER_TRACKING}{CACHE_KEY_SEP}*"


def session_key(token: str) -> str:
    """Cache key for the session record of a bearer token."""
    _validate_key_component(token, "token")
    return f"{CACHE_PREFIX_SESSION}{CACHE_KEY_SEP}{token}"


def user_sessions_key(user_id: str) -> str:
    """Cache key for the set of a user's active tokens."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_USER_SESSIONS}{CACHE_KEY_SEP}{user_id}"


def blacklist_key(token: str) -> str:
    """Cache key for a revoked-token marker."""
    _validate_key_component(token, "token")
    return f"{CACHE_PREFIX_BLACKLIST}{CACHE_KEY_SEP}{token}"
