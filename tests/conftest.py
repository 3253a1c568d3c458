"""
Shared test fixtures and configuration for entire test suite.

Provides: file-backed SQLite store handle, session engine, row backdating
helper, mocked engine for router tests
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select, update

from meetup.application.services import SessionEngine
from meetup.boundary.db import (
    create_all_tables,
    drop_all_tables,
    get_async_engine,
    get_async_session_factory,
    utcnow,
)
from meetup.configs.database import DatabaseSettings


@pytest.fixture
async def db_engine(tmp_path):
    """
    Create a SQLite database in a temporary file.

    File-backed so concurrent sessions each get their own connection.

    Yields:
        AsyncEngine: Engine with all tables created
    """
    settings = DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'meetup_test.db'}")
    engine = get_async_engine(settings)
    await create_all_tables(engine)

    yield engine

    await drop_all_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Provide async session factory bound to the test database."""
    return get_async_session_factory(db_engine)


@pytest.fixture
async def db(session_factory):
    """
    Provide an async session for direct CRUD calls.

    Tests commit explicitly when another connection must see the data;
    anything left uncommitted is rolled back.

    Yields:
        AsyncSession: Test database session
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def session_engine(session_factory) -> SessionEngine:
    """Provide SessionEngine wired to the test database."""
    return SessionEngine(session_factory=session_factory, store_timeout=5.0)


@pytest.fixture
def backdate(session_factory):
    """
    Shift a timestamp column into the past.

    Usage:
        await backdate(LocationMarkModel, "updated_at", timedelta(minutes=6), participant_id="p1")
    """

    async def _backdate(model, column: str, age: timedelta, **filters) -> None:
        async with session_factory() as session:
            async with session.begin():
                await session.execute(
                    update(model).filter_by(**filters).values({column: utcnow() - age})
                )

    return _backdate


@pytest.fixture
def count_rows(session_factory):
    """Count rows of a model, optionally filtered by column values."""

    async def _count(model, **filters) -> int:
        async with session_factory() as session:
            stmt = select(func.count()).select_from(model).filter_by(**filters)
            return (await session.execute(stmt)).scalar_one()

    return _count


@pytest.fixture
def mock_session_engine() -> AsyncMock:
    """Provide mocked SessionEngine for router tests."""
    engine = AsyncMock(spec=SessionEngine)
    engine.resolve_session_id = MagicMock(return_value="friday-drinks")
    return engine
