"""Integration tests for the bootstrap account seed."""

from shiptrack.domain.enums import UserRole
from shiptrack.infrastructure.persistence.repositories import UserRepository
from shiptrack.infrastructure.persistence.seed import SeedUser, seed_users
from shiptrack.infrastructure.security.password import verify_password

_ADMIN = SeedUser("admin@logistics.com", "admin123", "Admin User", UserRole.ADMIN)
_USER = SeedUser("user@logistics.com", "user123", "Regular User", UserRole.USER)


async def test_seed_creates_admin_and_user(session_factory) -> None:
    async with session_factory() as session:
        results = await seed_users(session, [_ADMIN, _USER])

    assert [(u.email, u.role, created) for u, created in results] == [
        ("admin@logistics.com", UserRole.ADMIN, True),
        ("user@logistics.com", UserRole.USER, True),
    ]
    async with session_factory() as session:
        admin = await UserRepository(session).get_credentials_by_email("admin@logistics.com")
    assert admin is not None
    assert admin.role is UserRole.ADMIN
    assert verify_password("admin123", admin.hashed_password)


async def test_seed_is_idempotent(session_factory) -> None:
    async with session_factory() as session:
        first = await seed_users(session, [_ADMIN, _USER])
    async with session_factory() as session:
        second = await seed_users(session, [_ADMIN, _USER])

    assert [created for _, created in second] == [False, False]
    assert [u.id for u, _ in second] == [u.id for u, _ in first]
    async with session_factory() as session:
        users = await UserRepository(session).list_users()
    assert len(users) == 2


async def test_seed_restores_admin_role_and_keeps_password(session_factory) -> None:
    async with session_factory() as session:
        [(admin, _)] = await seed_users(session, [_ADMIN])
        await UserRepository(session).update_role(admin.id, UserRole.USER)
        await session.commit()

    changed_password = SeedUser(_ADMIN.email, "different", _ADMIN.name, UserRole.ADMIN)
    async with session_factory() as session:
        [(reseeded, created)] = await seed_users(session, [changed_password])

    assert created is False
    assert reseeded.role is UserRole.ADMIN
    async with session_factory() as session:
        stored = await UserRepository(session).get_credentials_by_email(_ADMIN.email)
    assert stored is not None
    assert verify_password("admin123", stored.hashed_password)
