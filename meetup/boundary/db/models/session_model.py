"""
Session ORM model.

Represents a named meetup. Sessions own every message and location mark
written under their id and are the unit of retention.

Dependencies: sqlalchemy, meetup.boundary.db.base
System role: Session persistence and ownership root
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meetup.boundary.db.base import Base, CreatedAtMixin


class SessionModel(Base, CreatedAtMixin):
    """
    Session ORM model.

    The primary key is the slugified meetup name, so two clients typing the
    same name share one row. Rows are created lazily by the first write and
    removed by the retention sweep together with their children.

    Attributes:
        id: Slugified meetup name (natural key)
        name: Optional display name, mutable via rename
        created_at: Creation timestamp; drives the retention window
        messages: Chat messages in this session (cascading delete)
        locations: Latest location per participant (cascading delete)
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        doc="Display name shown instead of the slug",
    )

    messages = relationship(
        "MessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    locations = relationship(
        "LocationMarkModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
