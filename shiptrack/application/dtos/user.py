"""DTOs for user and auth use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from shiptrack.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    email: str
    name: str
    role: UserRole
    created_at: datetime


@dataclass(frozen=True)
class UserCredentials:
    """User row including the password hash; only used by authentication."""

    id: str
    email: str
    name: str
    role: UserRole
    hashed_password: str


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved from a bearer token."""

    id: str
    email: str
    name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role.is_elevated


@dataclass(frozen=True)
class AuthResult:
    """Result of register/login: the bearer token and the user it belongs to."""

    access_token: str
    user: UserResult
    token_type: str = "bearer"
