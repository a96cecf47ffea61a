"""Seed the bootstrap ADMIN account and a regular USER account.

Safe to re-run: existing accounts are left as they are, except that a seeded
account whose role was changed gets its seeded role back.

Usage:
    python -m scripts.seed_dev_data

Credentials come from the environment, falling back to development defaults:
    SEED_ADMIN_EMAIL, SEED_ADMIN_PASSWORD, SEED_ADMIN_NAME
    SEED_USER_EMAIL, SEED_USER_PASSWORD, SEED_USER_NAME
Requires: DATABASE_URL and SECRET_KEY (same settings as the API). Tables are
created if missing.
"""

from __future__ import annotations

import asyncio
import os
import sys

from shiptrack.core.config import get_settings
from shiptrack.domain.enums import UserRole
from shiptrack.infrastructure.persistence.database import (
    _ensure_engine,
    dispose_engine,
    init_models,
)
from shiptrack.infrastructure.persistence.seed import SeedUser, seed_users

_DEV_ADMIN_PASSWORD = "admin123"


def _seed_users_from_env() -> list[SeedUser]:
    return [
        SeedUser(
            email=os.environ.get("SEED_ADMIN_EMAIL", "admin@logistics.com"),
            password=os.environ.get("SEED_ADMIN_PASSWORD", _DEV_ADMIN_PASSWORD),
            name=os.environ.get("SEED_ADMIN_NAME", "Admin User"),
            role=UserRole.ADMIN,
        ),
        SeedUser(
            email=os.environ.get("SEED_USER_EMAIL", "user@logistics.com"),
            password=os.environ.get("SEED_USER_PASSWORD", "user123"),
            name=os.environ.get("SEED_USER_NAME", "Regular User"),
            role=UserRole.USER,
        ),
    ]


async def run() -> None:
    get_settings()
    users = _seed_users_from_env()
    if users[0].password == _DEV_ADMIN_PASSWORD:
        print(
            "Warning: using the development admin password; set SEED_ADMIN_PASSWORD",
            file=sys.stderr,
        )

    await init_models()
    session_factory = _ensure_engine()
    try:
        async with session_factory() as session:
            results = await seed_users(session, users)
    finally:
        await dispose_engine()

    for user, created in results:
        action = "Created" if created else "Exists"
        print(f"  {action}: {user.email} ({user.role.value}) -> {user.id}")
    print("Seed completed.")


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
