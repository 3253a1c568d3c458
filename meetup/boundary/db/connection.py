"""
Database connection management.

Builds the async SQLAlchemy engine and session factory that together form
the store handle. The handle is created once at process start and passed
to the session engine; there is no module-level connection.

Dependencies: sqlalchemy, meetup.configs
System role: Database connection lifecycle management
"""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker

from meetup.configs import get_settings
from meetup.configs.database import DatabaseSettings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE applies in SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Server databases get a sized connection pool with pre-ping; SQLite gets
    a busy timeout instead so concurrent writers wait rather than fail, and
    foreign keys are enforced on every new connection.

    Args:
        db_config: Database settings (defaults to application settings)

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or get_settings().database

    kwargs: dict[str, Any] = {"echo": db_config.echo_sql}
    if db_config.is_sqlite:
        kwargs["connect_args"] = {"timeout": db_config.pool_timeout}
    else:
        kwargs.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_pre_ping=True,  # Verify connections before using
        )

    engine = create_async_engine(db_config.url, **kwargs)
    if db_config.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Returns async_sessionmaker bound to engine with autoflush=False and
    expire_on_commit=False so rows stay readable after the transaction
    that produced them has committed.

    Args:
        engine: Engine returned by get_async_engine()

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session, session.begin():
            session.add(obj)
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
