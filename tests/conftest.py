from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from weatherapp.core.db import get_db
from weatherapp.main import app
from weatherapp.models import Base
from weatherapp.repositories.weather_observation_repository import WeatherObservationRepository
from weatherapp.routers.weather import get_weather_repository

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Create an in-memory SQLite async engine with all tables for one test.

    `StaticPool` keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    """
    Provide a fresh AsyncSession for each test.
    """
    TestingSessionLocal = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return WeatherObservationRepository(db_session)


@pytest.fixture
def test_app(db_session):
    """
    Return the FastAPI app with get_db overridden to use the test session.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def mock_repository():
    return AsyncMock(spec=WeatherObservationRepository)


@pytest.fixture
def mocked_app(mock_repository):
    """
    Return the FastAPI app with the weather repository replaced by a mock.
    """
    app.dependency_overrides[get_weather_repository] = lambda: mock_repository
    yield app
    app.dependency_overrides.clear()
