"""Session registry on the shared Redis store.

Maps opaque bearer tokens to session records (session:<token>), tracks each
user's active tokens (user_sessions:<userId>) and keeps a blacklist of
revoked tokens (blacklist:<token>). Sole writer of those three namespaces.

Token states: absent -> active -> expired | blacklisted | invalidated; every
exit from active is terminal for that token.

Any Redis failure surfaces as StoreUnavailableException. Callers must treat
it as "cannot authenticate", not as "unauthenticated".
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace

import redis.asyncio as redis

from shiptrack.application.dtos.session import SessionData
from shiptrack.core.cache_keys import (
    blacklist_key,
    session_key,
    user_sessions_key,
)
from shiptrack.core.constants import BLACKLIST_MARKER, SESSION_TTL_SECONDS
from shiptrack.domain.exceptions import StoreUnavailableException
from shiptrack.infrastructure.cache.redis_cache import CacheService
from shiptrack.shared.utils.datetime import now_ms

logger = logging.getLogger(__name__)

_STORE = "session store"


def _decode_session(raw: str, token_key: str) -> SessionData | None:
    """Parse a cached session payload; malformed payloads are treated as absent."""
    try:
        return SessionData.from_cache(json.loads(raw))
    except (TypeError, ValueError, KeyError):
        logger.warning("Malformed session payload under %s; ignoring", token_key)
        return None


class SessionRegistry:
    """Token -> session registry with per-user token sets and a blacklist."""

    def __init__(self, cache: CacheService, session_ttl: int = SESSION_TTL_SECONDS) -> None:
        self._cache = cache
        self.session_ttl = int(session_ttl)

    @property
    def _client(self) -> redis.Redis:
        return self._cache.client

    async def create_session(self, token: str, user_id: str, email: str, role: str) -> SessionData:
        """Write the session record and register the token in the user's set (one MULTI/EXEC)."""
        now = now_ms()
        session = SessionData(
            user_id=user_id,
            email=email,
            role=role,
            created_at=now,
            last_activity=now,
        )
        skey = session_key(token)
        ukey = user_sessions_key(user_id)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.set(skey, json.dumps(session.to_cache()), ex=self.session_ttl)
                pipe.sadd(ukey, token)
                pipe.expire(ukey, self.session_ttl)
                await pipe.execute()
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "create_session", str(e)) from e
        logger.info("Session created for user %s", user_id)
        return session

    async def get_session(self, token: str) -> SessionData | None:
        """Return the session and slide its TTL; None (no side effects) when absent.

        The refresh uses SET XX so a concurrently invalidated session is not
        resurrected.
        """
        skey = session_key(token)
        try:
            raw = await self._client.get(skey)
            if raw is None:
                return None
            session = _decode_session(raw, skey)
            if session is None:
                return None
            session = replace(session, last_activity=now_ms())
            refreshed = await self._client.set(
                skey,
                json.dumps(session.to_cache()),
                ex=self.session_ttl,
                xx=True,
            )
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "get_session", str(e)) from e
        if not refreshed:
            return None
        return session

    async def is_token_blacklisted(self, token: str) -> bool:
        try:
            return await self._client.exists(blacklist_key(token)) == 1
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "is_token_blacklisted", str(e)) from e

    async def validate_session(self, token: str) -> bool:
        """Return True if token is live. Blacklist is checked before the session record."""
        if await self.is_token_blacklisted(token):
            logger.debug("Rejected blacklisted token")
            return False
        return await self.get_session(token) is not None

    async def invalidate_session(self, token: str) -> None:
        """Delete the session and drop the token from its owner's set. No-op if absent."""
        skey = session_key(token)
        try:
            raw = await self._client.get(skey)
            if raw is None:
                return
            session = _decode_session(raw, skey)
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.delete(skey)
                if session is not None:
                    pipe.srem(user_sessions_key(session.user_id), token)
                await pipe.execute()
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "invalidate_session", str(e)) from e
        if session is None:
            # Owner unknown: the token stays in some user_sessions set until
            # that user's sessions are listed or the set expires.
            logger.warning("Deleted malformed session %s; owner's token set not updated", skey)
        else:
            logger.info("Session invalidated for user %s", session.user_id)

    async def invalidate_all_user_sessions(self, user_id: str) -> int:
        """Delete every session of the user and the token set itself. Returns tokens removed."""
        ukey = user_sessions_key(user_id)
        try:
            tokens = await self._client.smembers(ukey)
            if not tokens:
                return 0
            async with self._client.pipeline(transaction=True) as pipe:
                for token in tokens:
                    pipe.delete(session_key(token))
                pipe.delete(ukey)
                await pipe.execute()
        except redis.RedisError as e:
            raise StoreUnavailableException(
                _STORE, "invalidate_all_user_sessions", str(e)
            ) from e
        logger.info("Invalidated %s session(s) for user %s", len(tokens), user_id)
        return len(tokens)

    async def blacklist_token(self, token: str, ttl: int | None = None) -> None:
        """Write a revocation marker. Does not touch the session record or the user set."""
        expiry = int(ttl) if ttl else self.session_ttl
        try:
            await self._client.set(blacklist_key(token), BLACKLIST_MARKER, ex=expiry)
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "blacklist_token", str(e)) from e
        logger.info("Token blacklisted (TTL: %ss)", expiry)

    async def get_active_session_count(self, user_id: str) -> int:
        """Size of the user's token set (may include tokens whose records already expired)."""
        try:
            return int(await self._client.scard(user_sessions_key(user_id)))
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "get_active_session_count", str(e)) from e

    async def get_user_active_sessions(self, user_id: str) -> list[SessionData]:
        """Session records for the user's tokens. Each lookup slides that session's TTL.

        Tokens whose record has expired or is unreadable are pruned from the
        user's set, so the active-session count catches up.
        """
        ukey = user_sessions_key(user_id)
        try:
            tokens = await self._client.smembers(ukey)
        except redis.RedisError as e:
            raise StoreUnavailableException(_STORE, "get_user_active_sessions", str(e)) from e
        sessions: list[SessionData] = []
        stale: list[str] = []
        for token in sorted(tokens):
            session = await self.get_session(token)
            if session is None:
                stale.append(token)
            else:
                sessions.append(session)
        if stale:
            try:
                await self._client.srem(ukey, *stale)
            except redis.RedisError as e:
                raise StoreUnavailableException(
                    _STORE, "get_user_active_sessions", str(e)
                ) from e
            logger.info("Pruned %s stale token(s) for user %s", len(stale), user_id)
        return sessions
