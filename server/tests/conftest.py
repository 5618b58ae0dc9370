"""Test configuration and fixtures."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from gotzportal.core.config import DEFAULT_ADMIN_EMAIL, settings
from gotzportal.core.database import Base, get_db
from gotzportal.main import create_app
from gotzportal.models import *  # noqa: F403 - Import all models

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_HEADERS = {"Authorization": "Bearer dev-token"}


@pytest.fixture(autouse=True)
def fallback_settings(monkeypatch):
    """Every test starts without a database and without an admin password."""
    monkeypatch.setattr(settings, "database_url", None)
    monkeypatch.setattr(settings, "admin_password", "")
    monkeypatch.setattr(settings, "admin_email", DEFAULT_ADMIN_EMAIL)


@pytest.fixture
def with_database(monkeypatch):
    """Make ``has_db()`` true; sessions come from the ``test_session`` override."""
    monkeypatch.setattr(settings, "database_url", TEST_DATABASE_URL)


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def test_app():
    """A fresh application: its own in-memory store and empty fallback content."""
    return create_app()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """HTTP client for an application running without a database."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def db_client(test_app, test_session, with_database):
    """HTTP client for an application backed by the SQLite test database."""

    async def override_get_db():
        yield test_session

    test_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    test_app.dependency_overrides.clear()


class BrokenSession:
    """Stand-in session whose every statement fails, as if the database went away."""

    def __init__(self, error: Exception | None = None):
        self.error = error or ConnectionError("connection refused")

    async def execute(self, *args, **kwargs):
        raise self.error

    async def get(self, *args, **kwargs):
        raise self.error

    def add(self, instance):
        pass

    async def commit(self):
        raise self.error

    async def rollback(self):
        pass

    async def refresh(self, instance):
        raise self.error


@pytest_asyncio.fixture(scope="function")
async def broken_db_client(test_app, with_database):
    """HTTP client for an application whose configured database fails every query."""

    async def override_get_db():
        yield BrokenSession()

    test_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    test_app.dependency_overrides.clear()


@pytest.fixture
def sample_booking_data():
    """Sample booking form submission."""
    return {
        "full_name": "Amina Njoroge",
        "email": "amina@example.com",
        "phone": "+254 700 000 000",
        "number_of_travelers": 2,
        "travel_date": "2026-07-14",
        "special_requests": "Window seats on the bush plane",
    }


@pytest.fixture
def sample_contact_data():
    """Sample contact form submission."""
    return {
        "name": "Lars Eriksen",
        "email": "lars@example.com",
        "phone": "+47 400 00 000",
        "message": "Is the great migration visible in late July?",
    }
