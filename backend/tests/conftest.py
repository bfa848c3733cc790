"""
LabRecords Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (real SQLite store, API client,
       mocked sessions, sample payloads).

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine:         async engine on a fresh on-disk SQLite file
    ├── db_session:        AsyncSession bound to db_engine (service tests)
    ├── test_client:       HTTPX AsyncClient with get_db_session overridden
    ├── failing_client:    HTTPX AsyncClient whose store raises on every call
    ├── mock_db_session:   AsyncMock session (unit tests, no store at all)
    ├── analisis_payload:  valid POST /api/analisis body
    └── user_payload:      valid POST /api/users body
"""

import os
import tempfile
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run BEFORE any app import: settings and the module-level engine read
# these once
_TEST_DIR = tempfile.mkdtemp(prefix="labrecords_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/app.db"
os.environ["DB_AUTO_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from app.database import Base, get_db_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models import analisis, user  # noqa: E402,F401


# ══════════════════════════════════════════════════════════════════════════
# Store Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    A fresh SQLite database per test with both tables created.

    Why on-disk (not :memory:): every connection from the pool sees the same
    data, just like a real server.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'records.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """A session for calling services directly, outside HTTP."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGI.

    The per-request session dependency is swapped for one bound to the test
    engine, keeping the commit-on-success / rollback-on-error contract.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/users")
            assert response.status_code == 200
    """
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
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


@pytest_asyncio.fixture
async def failing_client() -> AsyncGenerator[AsyncClient, None]:
    """
    API client whose store is down: every query and flush raises.

    Used to check the 500 envelope carries the raw underlying message.
    """
    session = AsyncMock()
    session.execute = AsyncMock(side_effect=RuntimeError("store unavailable"))
    session.get = AsyncMock(side_effect=RuntimeError("store unavailable"))
    session.flush = AsyncMock(side_effect=RuntimeError("store unavailable"))
    session.add = MagicMock()

    async def override_get_db_session():
        yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.get.return_value = record
            result = await service.get_record(mock_db_session, str(record.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Sample Payloads
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def analisis_payload():
    """A complete, valid analysis body (fresh dict per test)."""
    return {
        "numero_analisis": "AN-2024-0001",
        "fecha_analisis": "2024-05-01T09:30:00Z",
        "tipo_analisis": "Hemograma",
        "laboratorio": "Laboratorio Central",
        "tecnico_responsable": "María López",
        "observaciones": "Muestra en ayunas",
    }


@pytest.fixture
def user_payload():
    """The sign-up body used throughout the user tests."""
    return {"name": "Ana", "email": "ana@x.com", "age": 30}
