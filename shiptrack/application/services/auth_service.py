"""Authentication: registration, login, logout and the bearer-token gate.

Every issued token is registered in the session registry; a token is accepted
only while its signature is valid, it is not blacklisted and its session
record still exists. A registry failure is reported as StoreUnavailableException,
never as "unauthenticated".
"""

from __future__ import annotations

import asyncio
import logging
import time

from shiptrack.application.dtos.session import ActiveSessions
from shiptrack.application.dtos.user import AuthResult, Principal, UserResult
from shiptrack.application.interfaces.repositories import IUserRepository
from shiptrack.application.interfaces.services import (
    IPasswordHasher,
    ISessionRegistry,
    ITokenService,
)
from shiptrack.domain.enums import UserRole
from shiptrack.domain.exceptions import (
    AuthenticationException,
    UserAlreadyExistsException,
)

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid credentials"

# Hash compared against when the email is unknown, so both failure paths cost one bcrypt check.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash(hasher: IPasswordHasher) -> str:
    """Return a valid hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            hasher.hash_password, "not-a-real-password"
        )
    return _dummy_hash_cache


class AuthService:
    """Register/login/logout users and resolve bearer tokens to principals."""

    def __init__(
        self,
        user_repo: IUserRepository,
        tokens: ITokenService,
        hasher: IPasswordHasher,
        sessions: ISessionRegistry | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._tokens = tokens
        self._hasher = hasher
        self._sessions = sessions

    async def _issue(self, user: UserResult) -> AuthResult:
        token = self._tokens.create_access_token(
            {"sub": user.id, "email": user.email, "role": user.role.value}
        )
        if self._sessions is not None:
            await self._sessions.create_session(
                token, user.id, user.email, user.role.value
            )
        return AuthResult(access_token=token, user=user)

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        """Create a USER account and sign it in. Raises UserAlreadyExistsException."""
        if await self._user_repo.email_exists(email):
            raise UserAlreadyExistsException()
        hashed = await asyncio.to_thread(self._hasher.hash_password, password)
        user = await self._user_repo.create_user(email, hashed, name, UserRole.USER)
        logger.info("User %s registered", user.id)
        return await self._issue(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and issue a token. Raises AuthenticationException."""
        credentials = await self._user_repo.get_credentials_by_email(email)
        if credentials is None:
            dummy_hash = await _get_dummy_hash(self._hasher)
            await asyncio.to_thread(self._hasher.verify_password, password, dummy_hash)
            raise AuthenticationException(_INVALID_CREDENTIALS)
        if not await asyncio.to_thread(
            self._hasher.verify_password, password, credentials.hashed_password
        ):
            raise AuthenticationException(_INVALID_CREDENTIALS)
        user = await self._user_repo.get_by_id(credentials.id)
        if user is None:
            raise AuthenticationException(_INVALID_CREDENTIALS)
        logger.info("User %s logged in", user.id)
        return await self._issue(user)

    def _remaining_token_ttl(self, token: str) -> int | None:
        """Seconds until the token's exp claim, or None when it cannot be read."""
        try:
            claims = self._tokens.verify_token(token)
        except ValueError:
            return None
        exp = claims.get("exp")
        if not isinstance(exp, int | float):
            return None
        return max(int(exp - time.time()), 1)

    async def logout(self, token: str) -> None:
        """End this token's session and blacklist the token until it would have expired."""
        if self._sessions is None:
            return
        await self._sessions.invalidate_session(token)
        await self._sessions.blacklist_token(token, self._remaining_token_ttl(token))

    async def logout_all(self, user_id: str) -> int:
        """End every session of the user. Returns the number of sessions removed."""
        if self._sessions is None:
            return 0
        return await self._sessions.invalidate_all_user_sessions(user_id)

    async def get_active_sessions(self, user_id: str) -> ActiveSessions:
        if self._sessions is None:
            return ActiveSessions(count=0, sessions=[])
        # Listing first prunes dead tokens, so the count matches the records
        sessions = await self._sessions.get_user_active_sessions(user_id)
        count = await self._sessions.get_active_session_count(user_id)
        return ActiveSessions(count=count, sessions=sessions)

    async def resolve_principal(self, token: str) -> Principal:
        """Authentication gate: verify token, check the session, load the user.

        Role is read from the user store, not from the token claims.

        Raises:
            AuthenticationException: Invalid, expired, revoked or orphaned token.
            StoreUnavailableException: Session registry unreachable.
        """
        try:
            claims = self._tokens.verify_token(token)
        except ValueError as e:
            raise AuthenticationException("Invalid or expired token") from e
        if self._sessions is not None and not await self._sessions.validate_session(
            token
        ):
            raise AuthenticationException("Session expired or revoked")
        user = await self._user_repo.get_by_id(str(claims["sub"]))
        if user is None:
            raise AuthenticationException("User no longer exists")
        return Principal(id=user.id, email=user.email, name=user.name, role=user.role)
