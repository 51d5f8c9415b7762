"""
Test fixtures for the station service.

Every test gets its own SQLite file as the document store; the HTTP
client overrides the session dependency to point at it.
"""

import asyncio
import os
import tempfile
import time

os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{os.path.join(tempfile.gettempdir(), 'evstations-test.db')}",
)
os.environ.setdefault("JWT_SECRET", "test-secret")

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from evstations.config import get_settings
from evstations.database import Base, create_engine_for_url, get_db
from evstations.main import app
import evstations.models.station  # noqa: F401
from evstations.services.repository import StationRepository
from evstations.services.stations import StationService


MAIN_ST = {
    "name": "Main St",
    "location": {"latitude": 40.7, "longitude": -74.0},
    "power": 150,
}


def make_token(sub="user-1", ttl=900, **claims):
    """Sign an access token the way the authentication service does."""
    settings = get_settings()
    now = int(time.time())
    payload = {"sub": sub, "iat": now, "exp": now + ttl, "scope": "access"}
    payload.update(claims)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(sub="user-1"):
    return {"Authorization": f"Bearer {make_token(sub)}"}


async def _create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def engine(tmp_path):
    """Fresh SQLite store with the station table."""
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'stations.db'}")
    asyncio.run(_create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def run_with_repository(session_maker):
    """Run ``fn(repository)`` inside a fresh session and event loop."""

    def _run(fn):
        async def scenario():
            async with session_maker() as session:
                return await fn(StationRepository(session))

        return asyncio.run(scenario())

    return _run


@pytest.fixture
def run_with_service(session_maker):
    """Run ``fn(service)`` inside a fresh session and event loop."""

    def _run(fn):
        async def scenario():
            async with session_maker() as session:
                return await fn(StationService(StationRepository(session)))

        return asyncio.run(scenario())

    return _run


@pytest.fixture
def client(session_maker):
    """HTTP client whose requests use the per-test store."""

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
