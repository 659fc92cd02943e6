"""
Canteen API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── test_settings:   Settings pointing at a temp SQLite file
    ├── test_app:        create_app(test_settings) with tables created
    ├── test_client:     HTTPX AsyncClient bound to test_app
    └── canteen_payload / menu_payload: valid request bodies
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any app import: canteen_api.main builds a default app at import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_TABLES"] = "false"

from canteen_api.config import Settings  # noqa: E402
from canteen_api.database import dispose_engine, init_db  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
        result = await service.create_canteen(mock_db_session, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def canteen_payload():
    return {"name": "Canteen A", "imageUrl": "https://x.test/a.png"}


@pytest.fixture
def menu_payload():
    """Valid POST /menus body minus `canteenId` (tests fill it in)."""
    return {
        "name": "Nasi Goreng",
        "type": "main",
        "price": 25000,
        "signature": True,
        "imageUrl": "https://x.test/nasi.png",
        "description": "Fried rice with egg",
    }


# ══════════════════════════════════════════════════════════════════════════
# Endpoint Fixtures (real SQLite database per test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'canteen.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_app(test_settings) -> AsyncGenerator[FastAPI, None]:
    """
    A fresh app with its own engine and empty tables.

    ASGITransport does not run lifespan events, so tables are created and
    the engine disposed here.
    """
    from canteen_api.main import create_app

    app = create_app(test_settings)
    await init_db(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
