"""
Shared CRUD plumbing for the session store models.

Every method works inside the caller's AsyncSession and flushes at most;
committing belongs to the session engine's transaction.

Dependencies: sqlalchemy
System role: Foundation for the session, message and location CRUD classes
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import CompileError
from sqlalchemy.ext.asyncio import AsyncSession

from meetup.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BaseCRUD(Generic[ModelT]):
    """Generic store access bound to one mapped model."""

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """Add a row and return it with database defaults (id, timestamps) loaded."""
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: Any, **kwargs) -> int:
        """
        Set columns on the row with primary key `id`.

        Returns:
            Number of rows matched (0 when the row does not exist)
        """
        stmt = update(self.model).where(self.model.id == id).values(**kwargs)
        return (await session.execute(stmt)).rowcount

    def insert_statement(self, session: AsyncSession):
        """
        Build a dialect-specific INSERT supporting ON CONFLICT clauses.

        Args:
            session: Async database session (its bind selects the dialect)

        Returns:
            Core insert construct for the model's table with on_conflict_* methods

        Raises:
            CompileError: If the bound dialect has no ON CONFLICT support here
        """
        dialect = session.get_bind().dialect.name
        try:
            insert = _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise CompileError(f"Upserts are not supported on dialect '{dialect}'")
        return insert(self.model.__table__)
