"""
Product API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_product_data: Product field values
    ├── test_engine: SQLite (aiosqlite) engine with the products table created
    └── test_client: HTTPX AsyncClient wired to the app and test_engine
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any application import
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="product_api_test_"), "test.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from product_api.database import get_db_session, init_store


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await ProductStore(mock_db_session).find_by_id(1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_product_data():
    """Field values for a product, as sent in a request body."""
    return {"name": "Laptop", "price": 1500.50, "quantity": 10}


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """
    A fresh SQLite database per test with the products table created.

    NullPool keeps connections from outliving the test's event loop.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'products.db'}",
        poolclass=NullPool,
    )
    await init_store(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(test_engine):
    """
    Provides an async HTTP test client for endpoint testing.

    Requests are routed straight to the ASGI app (no server, no lifespan);
    `get_db_session` is overridden to hand out sessions on test_engine.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/products")
            assert response.status_code == 200
    """
    from product_api.main import app

    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
