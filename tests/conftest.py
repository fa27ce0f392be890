"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from models.base import Base

TEST_API_TOKEN = "test-api-token"


def _configure_environment(url: str) -> None:
    """Set the variables Settings reads. Must happen before any app import."""
    os.environ["DATABASE_URL"] = url
    os.environ["API_TOKEN"] = TEST_API_TOKEN


@pytest.fixture(scope="session")
def database_url() -> Generator[str]:
    """
    Provide a PostgreSQL URL for the test session.

    Uses TEST_DATABASE_URL when set (e.g. a CI service container), otherwise
    starts a throwaway PostgreSQL container.
    """
    url = os.environ.get("TEST_DATABASE_URL")
    if url:
        _configure_environment(url)
        yield url
        return

    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        url = postgres.get_connection_url()
        _configure_environment(url)
        yield url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine for testing."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_connection(async_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection]:
    """
    Create a connection with a transaction that will be rolled back after the test.

    This provides test isolation - each test runs in its own transaction
    that is rolled back, so tests don't affect each other.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        try:
            yield connection
        finally:
            await transaction.rollback()


@pytest.fixture
async def db_session(db_connection: AsyncConnection) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session bound to the test transaction.

    Uses begin_nested() for savepoints, allowing the session's flush/commit
    to work within our outer test transaction.
    """
    session_factory = async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def app_with_test_session(db_session: AsyncSession) -> AsyncGenerator[FastAPI]:
    """Import the app with settings from the test environment and the test session injected."""
    # Clear the settings cache so it picks up DATABASE_URL/API_TOKEN from environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_test_session: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create a test client that sends the valid bearer token."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_test_session),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(app_with_test_session: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create a test client that sends no Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_test_session),
        base_url="http://test",
    ) as test_client:
        yield test_client
