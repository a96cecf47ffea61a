"""User administration: listing, role changes and deletion.

Role changes and deletions end every session of the affected user, so the
user signs in again and picks up the new role (or cannot sign in at all).
"""

from __future__ import annotations

import logging

from shiptrack.application.dtos.user import UserResult
from shiptrack.application.interfaces.repositories import IUserRepository
from shiptrack.application.interfaces.services import ISessionRegistry
from shiptrack.domain.enums import UserRole
from shiptrack.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class UserService:
    """Admin user operations."""

    def __init__(
        self, user_repo: IUserRepository, sessions: ISessionRegistry | None = None
    ) -> None:
        self._user_repo = user_repo
        self._sessions = sessions

    async def list_users(self) -> list[UserResult]:
        return await self._user_repo.list_users()

    async def get_user(self, user_id: str) -> UserResult:
        """Raises ResourceNotFoundException if user not found."""
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def update_role(self, user_id: str, role: UserRole) -> UserResult:
        """Set the user's role and end their sessions."""
        updated = await self._user_repo.update_role(user_id, role)
        if updated is None:
            raise ResourceNotFoundException("user", user_id)
        logger.info("User %s role set to %s", user_id, role.value)
        await self._end_sessions(user_id)
        return updated

    async def delete_user(self, user_id: str) -> None:
        """Delete the user (their orders cascade) and end their sessions."""
        if not await self._user_repo.delete_user(user_id):
            raise ResourceNotFoundException("user", user_id)
        logger.info("User %s deleted", user_id)
        await self._end_sessions(user_id)

    async def _end_sessions(self, user_id: str) -> None:
        if self._sessions is not None:
            await self._sessions.invalidate_all_user_sessions(user_id)
