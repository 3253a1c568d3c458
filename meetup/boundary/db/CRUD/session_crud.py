"""
Session CRUD operations.

Provides idempotent creation, lookup, rename and the retention sweep for
SessionModel.

Dependencies: sqlalchemy, meetup.boundary.db.models
System role: Session persistence operations
"""

from datetime import timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from meetup.boundary.db.base import utcnow
from meetup.boundary.db.models import LocationMarkModel, MessageModel, SessionModel
from meetup.boundary.db.CRUD.base_crud import BaseCRUD


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Extends BaseCRUD with create-if-absent semantics and the cascading
    retention sweep.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def ensure(self, session: AsyncSession, id: str) -> bool:
        """
        Insert a session row unless one already exists.

        Racing callers on the same new id collapse to a single row; the
        loser's insert is ignored rather than raising.

        Args:
            session: Async database session
            id: Session id

        Returns:
            True if this call created the row, False if it already existed
        """
        stmt = (
            self.insert_statement(session)
            .values(id=id, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=["id"])
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def rename(self, session: AsyncSession, id: str, name: str) -> bool:
        """
        Set the display name of a session.

        Args:
            session: Async database session
            id: Session id
            name: New display name

        Returns:
            True if a session was updated, False if none matched
        """
        return await self.update_by_id(session, id, name=name) > 0

    async def reap_expired(self, session: AsyncSession, max_age: timedelta) -> int:
        """
        Delete sessions older than max_age together with their children.

        Children are removed by selecting every message and location whose
        session no longer exists, which also clears rows orphaned by earlier
        failures. All statements run in the caller's transaction so a session
        and its children disappear together.

        Args:
            session: Async database session
            max_age: Retention window measured from created_at

        Returns:
            Number of sessions deleted
        """
        cutoff = utcnow() - max_age
        result = await session.execute(
            delete(SessionModel)
            .where(SessionModel.created_at < cutoff)
            .execution_options(synchronize_session=False)
        )

        live_sessions = select(SessionModel.id)
        for child in (MessageModel, LocationMarkModel):
            await session.execute(
                delete(child)
                .where(child.session_id.not_in(live_sessions))
                .execution_options(synchronize_session=False)
            )

        return result.rowcount


session_crud = SessionCRUD()
