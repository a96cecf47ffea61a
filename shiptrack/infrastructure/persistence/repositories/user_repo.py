"""User repository. Interface methods return application DTOs."""

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiptrack.application.dtos.user import UserCredentials, UserResult
from shiptrack.domain.enums import UserRole
from shiptrack.domain.exceptions import UserAlreadyExistsException
from shiptrack.infrastructure.persistence.models.user import User
from shiptrack.infrastructure.persistence.repositories.base import BaseRepository
from shiptrack.shared.utils.datetime import ensure_utc


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        email=u.email,
        name=u.name,
        role=UserRole(u.role),
        created_at=ensure_utc(u.created_at),
    )


class UserRepository(BaseRepository[User]):
    """User repository. Lookup by id/email, create_user, role changes, delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self.get_entity(user_id)
        return _user_to_result(user) if user else None

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return UserCredentials(
            id=user.id,
            email=user.email,
            name=user.name,
            role=UserRole(user.role),
            hashed_password=user.hashed_password,
        )

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(select(exists().where(User.email == email)))
        return bool(result.scalar())

    async def create_user(
        self, email: str, hashed_password: str, name: str, role: UserRole
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException on unique constraint violation."""
        user = User(
            email=email,
            name=name,
            hashed_password=hashed_password,
            role=role.value,
        )
        try:
            created = await self.create(user)
        except IntegrityError:
            raise UserAlreadyExistsException()
        return _user_to_result(created)

    async def list_users(self) -> list[UserResult]:
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return [_user_to_result(u) for u in result.scalars().all()]

    async def update_role(self, user_id: str, role: UserRole) -> UserResult | None:
        user = await self.get_entity(user_id)
        if not user:
            return None
        user.role = role.value
        updated = await self.update(user)
        return _user_to_result(updated)

    async def delete_user(self, user_id: str) -> bool:
        """Delete user and, through the relationship cascade, their orders."""
        user = await self.get_entity(user_id)
        if not user:
            return False
        await self.delete(user)
        return True
