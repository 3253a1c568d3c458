"""
LocationMark ORM model.

Last known position of each participant in a session.

Dependencies: sqlalchemy, meetup.boundary.db.base
System role: Perishable participant location persistence
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meetup.boundary.db.base import Base, utcnow


class LocationMarkModel(Base):
    """
    LocationMark ORM model.

    Single slot per (session_id, participant_id): a new ping overwrites the
    previous row instead of appending. Marks older than the freshness
    window stay in the table but are filtered out of reads.

    Attributes:
        id: Auto-incrementing surrogate key
        session_id: Owning session
        participant_id: Caller-supplied participant id
        participant_name: Caller-supplied display name
        latitude: Decimal degrees, -90..90
        longitude: Decimal degrees, -180..180
        updated_at: Store-assigned timestamp of the latest ping

    Constraints:
        (session_id, participant_id): UNIQUE, target of the upsert
    """

    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("session_id", "participant_id", name="uq_locations_session_participant"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    participant_id: Mapped[str] = mapped_column(String(255), nullable=False)
    participant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )

    session = relationship("SessionModel", back_populates="locations")
