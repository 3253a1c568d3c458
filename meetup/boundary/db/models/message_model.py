"""
Message ORM model.

Append-only chat log scoped to a session.

Dependencies: sqlalchemy, meetup.boundary.db.base
System role: Chat message persistence
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from meetup.boundary.db.base import Base, CreatedAtMixin


class MessageModel(Base, CreatedAtMixin):
    """
    Message ORM model.

    Messages are inserted once and never updated. Ordering is by
    created_at with the auto-incrementing id as tie-breaker.

    Attributes:
        id: Auto-incrementing surrogate key
        session_id: Owning session
        sender_id: Caller-supplied participant id
        sender_name: Caller-supplied display name
        content: Message text (may be empty)
        created_at: Store-assigned insert timestamp
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(String(255), nullable=False)
    sender_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    session = relationship("SessionModel", back_populates="messages")
