"""Idempotent bootstrap accounts.

Registration only ever creates USER accounts, so the first ADMIN has to come
from here. Existing accounts keep their password and name; only the role is
brought back in line.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from shiptrack.application.dtos.user import UserResult
from shiptrack.domain.enums import UserRole
from shiptrack.infrastructure.persistence.repositories import UserRepository
from shiptrack.infrastructure.security.password import get_password_hash

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedUser:
    email: str
    password: str
    name: str
    role: UserRole


async def upsert_user(repo: UserRepository, seed: SeedUser) -> tuple[UserResult, bool]:
    """Create the account if its email is unknown. Returns (user, created)."""
    existing = await repo.get_credentials_by_email(seed.email)
    if existing is None:
        user = await repo.create_user(
            seed.email, get_password_hash(seed.password), seed.name, seed.role
        )
        logger.info("Seeded %s account %s", seed.role.value, seed.email)
        return user, True
    if existing.role is not seed.role:
        user = await repo.update_role(existing.id, seed.role)
        logger.info("Reset role of %s to %s", seed.email, seed.role.value)
    else:
        user = await repo.get_by_id(existing.id)
    assert user is not None
    return user, False


async def seed_users(
    session: AsyncSession, users: list[SeedUser]
) -> list[tuple[UserResult, bool]]:
    """Upsert every account in one transaction; the caller's session is committed."""
    repo = UserRepository(session)
    results = [await upsert_user(repo, seed) for seed in users]
    await session.commit()
    return results
