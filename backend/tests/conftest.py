"""
PlotRegistry Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        In-memory SQLite (aiosqlite) with all tables created
    ├── session_factory:  async_sessionmaker bound to db_engine
    ├── db_session:       One open session for service-level tests
    ├── mock_db_session:  AsyncMock session for store-failure paths
    ├── block / customer: Records created inside db_session
    ├── seeded_block:     Committed block for endpoint tests
    ├── plot_payload:     Valid create body for a given block
    └── test_client:      HTTPX AsyncClient wired to the app with db_engine
"""

import os

# Point settings at SQLite BEFORE any app import builds the engine
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db_session
from app.models.block import Block, Customer
from app.models.plot import Plot  # noqa: F401


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps the single SQLite connection alive across sessions,
    otherwise every new connection would see an empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """One session shared by a service test; rolled back when the test ends."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(DatabaseError): ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def block(db_session):
    record = Block(name="Block B1")
    db_session.add(record)
    await db_session.flush()
    return record


@pytest_asyncio.fixture
async def other_block(db_session):
    record = Block(name="Block B2")
    db_session.add(record)
    await db_session.flush()
    return record


@pytest_asyncio.fixture
async def customer(db_session):
    record = Customer(name="Ayesha Khan", phone="+92-300-0000000")
    db_session.add(record)
    await db_session.flush()
    return record


@pytest_asyncio.fixture
async def seeded_block(session_factory):
    """A committed block, visible to the sessions the API opens."""
    async with session_factory() as session:
        record = Block(name="Block B1")
        session.add(record)
        await session.commit()
    return record


@pytest.fixture
def plot_payload():
    """Builds a valid create body (wire names) for the given block id."""
    def _build(block_id, **overrides):
        body = {
            "blockId": str(block_id),
            "plotNumber": "P-100",
            "plotType": "house",
            "areaUnit": "marla",
            "area": 5,
            "category": "residential",
        }
        body.update(overrides)
        return body
    return _build


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    get_db_session is overridden so each request gets its own session on the
    test database, with the same commit/rollback behaviour as production.
    """
    from app.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
