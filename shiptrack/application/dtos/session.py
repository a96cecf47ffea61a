"""DTOs for session use cases (no dependency on Redis)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SessionData:
    """Session record stored under session:<token>.

    Timestamps are Unix epoch milliseconds. The cached JSON uses camelCase
    keys so records are readable by other services sharing the store.
    """

    user_id: str
    email: str
    role: str
    created_at: int
    last_activity: int

    def to_cache(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "email": self.email,
            "role": self.role,
            "createdAt": self.created_at,
            "lastActivity": self.last_activity,
        }

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> "SessionData":
        """Build from a cached dict. Raises KeyError/TypeError/ValueError on malformed data."""
        return cls(
            user_id=str(data["userId"]),
            email=str(data["email"]),
            role=str(data["role"]),
            created_at=int(data["createdAt"]),
            last_activity=int(data["lastActivity"]),
        )


@dataclass(frozen=True)
class ActiveSessions:
    """Result of listing a user's sessions (count is the size of the token set)."""

    count: int
    sessions: list[SessionData]
