"""
Message CRUD operations.

Append and most-recent-first listing for MessageModel.

Dependencies: sqlalchemy, meetup.boundary.db.models
System role: Chat message persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meetup.boundary.db.models import MessageModel, SessionModel
from meetup.boundary.db.CRUD.base_crud import BaseCRUD


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def insert(
        self,
        session: AsyncSession,
        session_id: str,
        sender_id: str,
        sender_name: str | None,
        content: str,
    ) -> MessageModel:
        """
        Append a message to a session.

        Args:
            session: Async database session
            session_id: Owning session id (must already exist)
            sender_id: Participant id of the sender
            sender_name: Display name of the sender
            content: Message text

        Returns:
            Stored MessageModel with id and created_at assigned
        """
        return await self.create(
            session,
            session_id=session_id,
            sender_id=sender_id,
            sender_name=sender_name,
            content=content,
        )

    async def list_recent(
        self,
        session: AsyncSession,
        session_id: str,
        limit: int,
    ) -> Sequence[MessageModel]:
        """
        Retrieve the latest messages of a session, newest first.

        Only messages whose session still exists are returned.

        Args:
            session: Async database session
            session_id: Session id
            limit: Maximum number of messages

        Returns:
            Sequence of MessageModels ordered by created_at then id, descending
        """
        stmt = (
            select(MessageModel)
            .join(SessionModel, SessionModel.id == MessageModel.session_id)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


message_crud = MessageCRUD()
