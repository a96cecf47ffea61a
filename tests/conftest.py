"""Pytest configuration and fixtures for shiptrack.

Redis is emulated with fakeredis; the relational store is a throwaway sqlite
file per test. HTTP tests run the app in-process through httpx ASGITransport
(no lifespan: stores are attached to app.state by the fixtures).
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-0123456789")
os.environ.setdefault("DATABASE_AUTO_CREATE", "false")

import fakeredis
import fakeredis.aioredis
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shiptrack.core.limiter import limiter
from shiptrack.infrastructure.cache import CacheService, SessionRegistry
from shiptrack.infrastructure.persistence import models  # noqa: F401
from shiptrack.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
)
from shiptrack.main import create_app

limiter.enabled = False


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    """In-memory Redis server; set .connected = False to simulate an outage."""
    return fakeredis.FakeServer()


@pytest.fixture
async def redis_client(redis_server):
    client = fakeredis.aioredis.FakeRedis(server=redis_server, decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def cache(redis_client) -> CacheService:
    return CacheService(redis_client=redis_client)


@pytest.fixture
def session_registry(cache: CacheService) -> SessionRegistry:
    return SessionRegistry(cache)


@pytest.fixture
async def db_engine(tmp_path) -> AsyncEngine:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shiptrack.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Session for repository tests; the database file is discarded after the test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory, cache, session_registry) -> FastAPI:
    """App wired to the test database and fakeredis-backed stores."""
    application = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    async def override_get_db_transactional():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_db_transactional] = override_get_db_transactional
    application.state.cache = cache
    application.state.session_registry = session_registry
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
