"""
ContactBook Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped — fresh for each test):
    ├── test_settings: Settings pointing at a throwaway SQLite file
    ├── mock_repository: AsyncMock ContactRepository (no database at all)
    ├── contact_repository: Real repository over the SQLite file, schema created
    ├── test_app: create_app(test_settings) with the schema created
    └── test_client: HTTPX AsyncClient routed straight into test_app
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Keep the default settings instance away from any real database or .env values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from app.config import Settings  # noqa: E402
from app.database import (  # noqa: E402
    create_engine,
    create_session_factory,
    dispose_engine,
    init_schema,
)
from app.main import create_app  # noqa: E402
from app.repositories.contact_repository import ContactRepository  # noqa: E402


@pytest.fixture
def test_settings(tmp_path):
    """Settings for one test: its own SQLite file, no implicit schema creation."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'contacts.db'}",
        log_level="WARNING",
        db_auto_create_schema=False,
    )


@pytest.fixture
def mock_repository():
    """
    Provides a mock ContactRepository.

    Usage:
        async def test_get(mock_repository):
            mock_repository.find_by_id.return_value = {"_id": "...", "name": "Alice"}
            result = await ContactService(mock_repository).get_contact("...")
    """
    repository = MagicMock(spec=ContactRepository)
    repository.insert = AsyncMock()
    repository.find_all = AsyncMock(return_value=[])
    repository.find_by_id = AsyncMock(return_value=None)
    repository.find_and_update_by_id = AsyncMock(return_value=None)
    repository.remove_by_id = AsyncMock(return_value=0)
    repository.ping = AsyncMock()
    return repository


@pytest_asyncio.fixture
async def contact_repository(test_settings):
    """A real ContactRepository backed by the per-test SQLite file."""
    engine = create_engine(test_settings)
    await init_schema(engine)
    yield ContactRepository(create_session_factory(engine))
    await dispose_engine(engine)


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    A fully wired application.

    ASGITransport does not run the lifespan, so the schema is created here
    and the engine disposed on teardown.
    """
    app = create_app(test_settings)
    await init_schema(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
