"""Service interfaces (ports) used by application services."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from shiptrack.application.dtos.session import SessionData

T = TypeVar("T")


class ICacheService(Protocol):
    """Protocol for the key-value cache (Redis in production)."""

    def is_available(self) -> bool: ...

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def delete_pattern(self, pattern: str) -> int: ...

    async def get_or_set(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: int | None = None,
    ) -> T: ...


class ISessionRegistry(Protocol):
    """Protocol for the token/session registry (Redis-backed in production)."""

    async def create_session(
        self, token: str, user_id: str, email: str, role: str
    ) -> SessionData: ...

    async def validate_session(self, token: str) -> bool: ...

    async def invalidate_session(self, token: str) -> None: ...

    async def invalidate_all_user_sessions(self, user_id: str) -> int: ...

    async def blacklist_token(self, token: str, ttl: int | None = None) -> None: ...

    async def get_active_session_count(self, user_id: str) -> int: ...

    async def get_user_active_sessions(self, user_id: str) -> list[SessionData]: ...


class ITokenService(Protocol):
    """Protocol for bearer token issue/verification (JWT in production)."""

    def create_access_token(self, data: dict[str, Any]) -> str: ...

    def verify_token(self, token: str) -> dict[str, Any]:
        """Return claims; raise ValueError if invalid or expired."""
        ...


class IPasswordHasher(Protocol):
    """Protocol for password hashing."""

    def hash_password(self, password: str) -> str: ...

    def verify_password(self, plain_password: str, hashed_password: str) -> bool: ...
