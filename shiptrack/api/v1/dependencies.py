"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, stores and application services.
All services are built from infrastructure implementations here; routes
depend only on these dependencies, not on infra directly.

Read endpoints use get_db; write endpoints use get_db_transactional
(commit on success, rollback on exception).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shiptrack.application.dtos.user import Principal
from shiptrack.application.services import (
    AuthService,
    HealthService,
    OrderService,
    UserService,
)
from shiptrack.core.constants import CacheTTL
from shiptrack.domain.enums import UserRole
from shiptrack.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
)
from shiptrack.infrastructure.cache import CacheService, SessionRegistry
from shiptrack.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    ping_database,
)
from shiptrack.infrastructure.persistence.repositories import (
    OrderRepository,
    UserRepository,
)
from shiptrack.infrastructure.security.jwt import create_access_token, verify_token
from shiptrack.infrastructure.security.password import (
    get_password_hash,
    verify_password,
)


class AuthSecurity:
    """Token and password hashing provided via DI (no direct infra imports in services)."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        return create_access_token(data)

    def verify_token(self, token: str) -> dict[str, Any]:
        return verify_token(token)

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return verify_password(plain_password, hashed_password)


def get_auth_security() -> AuthSecurity:
    return AuthSecurity()


# ---- Stores (process-wide, created in lifespan) ----


def get_cache(request: Request) -> CacheService | None:
    """Shared CacheService from app.state; None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_session_registry(request: Request) -> SessionRegistry | None:
    """Shared SessionRegistry from app.state; None when Redis is disabled."""
    return getattr(request.app.state, "session_registry", None)


# ---- Repositories ----


def get_order_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> OrderRepository:
    return OrderRepository(db)


def get_order_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> OrderRepository:
    return OrderRepository(db)


def get_user_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_user_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    return UserRepository(db)


# ---- Services ----


def get_order_service(
    order_repo: Annotated[OrderRepository, Depends(get_order_repo)],
    cache: Annotated[CacheService | None, Depends(get_cache)],
) -> OrderService:
    return OrderService(order_repo, cache, tracking_ttl=CacheTTL.MEDIUM)


def get_order_service_for_write(
    order_repo: Annotated[OrderRepository, Depends(get_order_repo_for_write)],
    cache: Annotated[CacheService | None, Depends(get_cache)],
) -> OrderService:
    return OrderService(order_repo, cache, tracking_ttl=CacheTTL.MEDIUM)


def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    security: Annotated[AuthSecurity, Depends(get_auth_security)],
    sessions: Annotated[SessionRegistry | None, Depends(get_session_registry)],
) -> AuthService:
    return AuthService(user_repo, security, security, sessions)


def get_auth_service_for_write(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    security: Annotated[AuthSecurity, Depends(get_auth_security)],
    sessions: Annotated[SessionRegistry | None, Depends(get_session_registry)],
) -> AuthService:
    return AuthService(user_repo, security, security, sessions)


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    sessions: Annotated[SessionRegistry | None, Depends(get_session_registry)],
) -> UserService:
    return UserService(user_repo, sessions)


def get_user_service_for_write(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    sessions: Annotated[SessionRegistry | None, Depends(get_session_registry)],
) -> UserService:
    return UserService(user_repo, sessions)


def get_health_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheService | None, Depends(get_cache)],
) -> HealthService:
    async def probe() -> None:
        await ping_database(db)

    return HealthService(probe, cache)


# ---- Authentication ----

_http_bearer = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str:
    """Raw bearer token; AuthenticationException when the header is missing."""
    if not credentials or not credentials.credentials:
        raise AuthenticationException("Not authenticated")
    return credentials.credentials


async def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Principal:
    """Resolve the caller from the bearer token (signature, blacklist, session, user row)."""
    return await auth_service.resolve_principal(token)


def require_role(role: UserRole) -> Callable[..., Awaitable[Principal]]:
    """Dependency factory: require an authenticated caller holding the given role."""

    async def _require(
        current_user: Annotated[Principal, Depends(get_current_user)],
    ) -> Principal:
        if current_user.role is not role:
            raise AuthorizationException(required_role=role.value)
        return current_user

    return _require


require_admin = require_role(UserRole.ADMIN)
