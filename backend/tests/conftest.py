"""Root conftest — shared test configuration and async DB fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database (StaticPool: one
      connection shared by fixtures and request sessions)
    - get_db dependency overridden to use the test session factory
    - Each app is built with its own InMemorySink
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import userhub.models  # noqa: E402,F401
from userhub.config import Settings  # noqa: E402
from userhub.db.base import Base  # noqa: E402
from userhub.infrastructure.database import get_db  # noqa: E402
from userhub.infrastructure.observability import InMemorySink  # noqa: E402
from userhub.main import create_app  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def drop_users_table(test_engine):
    """Remove the users table so every query fails with a driver error."""
    async def _drop():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    return _drop


@pytest.fixture
def sink():
    return InMemorySink()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        environment="development",
    )


@pytest.fixture
def make_app(test_session_factory, sink):
    """Build an app for the given settings with get_db overridden."""
    def _make(app_settings: Settings):
        application = create_app(app_settings, sink=sink)

        async def override_get_db():
            async with test_session_factory() as session:
                yield session

        application.dependency_overrides[get_db] = override_get_db
        return application
    return _make


@pytest.fixture
def app(make_app, settings):
    return make_app(settings)


@pytest.fixture
async def client(app):
    """HTTP client bound to the app through ASGI (no network)."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
