"""
LocationMark CRUD operations.

Replace-on-conflict writes and freshness-filtered reads for
LocationMarkModel.

Dependencies: sqlalchemy, meetup.boundary.db.models
System role: Participant location persistence operations
"""

from datetime import timedelta
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meetup.boundary.db.base import utcnow
from meetup.boundary.db.models import LocationMarkModel, SessionModel
from meetup.boundary.db.CRUD.base_crud import BaseCRUD


class LocationCRUD(BaseCRUD[LocationMarkModel]):
    """
    CRUD operations for LocationMarkModel.

    Each participant owns exactly one row per session; writes overwrite it.
    """

    def __init__(self) -> None:
        """Initialize LocationCRUD with LocationMarkModel."""
        super().__init__(LocationMarkModel)

    async def upsert(
        self,
        session: AsyncSession,
        session_id: str,
        participant_id: str,
        participant_name: str | None,
        latitude: float,
        longitude: float,
    ) -> LocationMarkModel:
        """
        Insert or overwrite the participant's location mark.

        Conflicts on (session_id, participant_id) replace name, coordinates
        and updated_at. A write carrying an older timestamp than the stored
        row is ignored, so the latest store timestamp wins.

        Args:
            session: Async database session
            session_id: Owning session id (must already exist)
            participant_id: Participant id
            participant_name: Participant display name
            latitude: Decimal degrees
            longitude: Decimal degrees

        Returns:
            The stored LocationMarkModel after the write
        """
        table = LocationMarkModel.__table__
        stmt = self.insert_statement(session).values(
            session_id=session_id,
            participant_id=participant_id,
            participant_name=participant_name,
            latitude=latitude,
            longitude=longitude,
            updated_at=utcnow(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["session_id", "participant_id"],
            set_={
                "participant_name": stmt.excluded.participant_name,
                "latitude": stmt.excluded.latitude,
                "longitude": stmt.excluded.longitude,
                "updated_at": stmt.excluded.updated_at,
            },
            where=table.c.updated_at <= stmt.excluded.updated_at,
        )
        await session.execute(stmt)

        result = await session.execute(
            select(LocationMarkModel)
            .where(
                LocationMarkModel.session_id == session_id,
                LocationMarkModel.participant_id == participant_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list_fresh(
        self,
        session: AsyncSession,
        session_id: str,
        max_age: timedelta,
    ) -> Sequence[LocationMarkModel]:
        """
        Retrieve location marks updated within max_age of now.

        Only marks whose session still exists are returned.

        Args:
            session: Async database session
            session_id: Session id
            max_age: Freshness window

        Returns:
            Sequence of LocationMarkModels, most recently updated first
        """
        cutoff = utcnow() - max_age
        stmt = (
            select(LocationMarkModel)
            .join(SessionModel, SessionModel.id == LocationMarkModel.session_id)
            .where(
                LocationMarkModel.session_id == session_id,
                LocationMarkModel.updated_at > cutoff,
            )
            .order_by(LocationMarkModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


location_crud = LocationCRUD()
