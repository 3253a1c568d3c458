"""
Dependency injection container.

Holds the process-wide store handle and session engine, built lazily on
first use (normally during application startup) and disposed on shutdown.

Dependencies: sqlalchemy, meetup.configs, meetup.application, meetup.boundary
System role: DI container for service injection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from meetup.application.services import SessionEngine
from meetup.boundary.db import get_async_engine, get_async_session_factory
from meetup.configs import get_settings

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._db_engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker | None = None
        self._session_engine: SessionEngine | None = None

    @property
    def db_engine(self) -> AsyncEngine:
        """Get cached async database engine."""
        if self._db_engine is None:
            self._db_engine = get_async_engine(get_settings().database)
        return self._db_engine

    @property
    def session_factory(self) -> async_sessionmaker:
        """Get cached session factory bound to the database engine."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.db_engine)
        return self._session_factory

    @property
    def session_engine(self) -> SessionEngine:
        """Get cached session engine."""
        if self._session_engine is None:
            self._session_engine = SessionEngine(
                session_factory=self.session_factory,
                store_timeout=get_settings().engine.store_timeout_seconds,
            )
        return self._session_engine

    async def close(self) -> None:
        """Dispose the database engine and clear all cached instances."""
        if self._db_engine is not None:
            await self._db_engine.dispose()
            logger.info("Database engine disposed")
        self._db_engine = None
        self._session_factory = None
        self._session_engine = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_session_engine() -> SessionEngine:
    """
    Get session engine instance.

    Returns:
        SessionEngine: Process-wide session engine
    """
    return get_service_cache().session_engine


def get_db_engine() -> AsyncEngine:
    """
    Get database engine for health probes.

    Returns:
        AsyncEngine: Process-wide async engine
    """
    return get_service_cache().db_engine
