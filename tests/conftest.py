"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, persisted users, S3 client mock
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import MagicMock

import pytest


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Foreign keys are enforced so ON DELETE CASCADE behaves as in Postgres.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy import event
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool

    from jobtracker.boundary.db.base import Base
    from jobtracker.boundary.db import models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def user(test_async_db):
    """Persisted user owning the data under test."""
    from jobtracker.boundary.db.models import UserModel

    instance = UserModel(email="ada@example.com", name="Ada Lovelace")
    test_async_db.add(instance)
    await test_async_db.commit()
    return instance


@pytest.fixture
async def other_user(test_async_db):
    """Second persisted user, for ownership checks."""
    from jobtracker.boundary.db.models import UserModel

    instance = UserModel(email="grace@example.com", name="Grace Hopper")
    test_async_db.add(instance)
    await test_async_db.commit()
    return instance


@pytest.fixture
def user_dict():
    """Current-user dict as returned by get_current_user."""
    return {
        "id": uuid.uuid4(),
        "email": "ada@example.com",
        "name": "Ada Lovelace",
        "image": None,
    }


@pytest.fixture
def mock_s3_client():
    """
    Create mock S3DocumentClient for testing.

    Returns:
        MagicMock: Blocking client mock (services call it via to_thread)
    """
    client = MagicMock()
    client.upload_file = MagicMock(return_value=None)
    client.delete_file = MagicMock(return_value=None)
    client.download_file = MagicMock(return_value=(b"%PDF-1.4\n", "application/pdf", 9))
    return client
