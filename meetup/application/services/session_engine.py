"""
Session engine.

The single entry point for reading and writing meetup sessions. Wraps the
CRUD layer with the domain rules: lazy session creation, single-slot
location marks, the freshness window for locations and the retention
window for whole sessions.

Dependencies: sqlalchemy, meetup.boundary.db.CRUD, meetup.core
System role: Session synchronization use case orchestration
"""

import asyncio
import logging
import math
from datetime import timedelta
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from meetup.boundary.db.CRUD import location_crud, message_crud, session_crud
from meetup.boundary.db.models import LocationMarkModel, MessageModel, SessionModel
from meetup.core.exceptions import SessionNotFoundError, StoreError, ValidationError
from meetup.core.naming import slugify_session_name
from meetup.core.types import Coordinates, Participant, SessionView

logger = logging.getLogger(__name__)

T = TypeVar("T")

FRESHNESS_WINDOW = timedelta(minutes=5)
RETENTION_WINDOW = timedelta(hours=24)
MESSAGE_HISTORY_LIMIT = 100


def _require(value: str | None, field: str, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required", field=field)
    return value


def _validate_coordinates(location: Coordinates) -> tuple[float, float]:
    lat, lon = location.latitude, location.longitude
    if lat is None or lon is None:
        raise ValidationError("Location requires latitude and longitude", field="location")
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise ValidationError("Latitude must be between -90 and 90", field="location.latitude")
    if not (math.isfinite(lon) and -180.0 <= lon <= 180.0):
        raise ValidationError("Longitude must be between -180 and 180", field="location.longitude")
    return lat, lon


class SessionEngine:
    """
    Session synchronization engine.

    Built once per process around the store handle (an async session
    factory). Every operation opens its own database session, runs inside a
    single transaction and is bounded by store_timeout. Persistence failures
    surface as StoreError; nothing is retried here.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        store_timeout: float = 10.0,
    ) -> None:
        """
        Initialize session engine.

        Args:
            session_factory: Async session factory bound to the store engine
            store_timeout: Seconds a single operation may take before failing
        """
        self.session_factory = session_factory
        self.store_timeout = store_timeout

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """
        Execute work in its own transaction under the store timeout.

        Args:
            operation: Operation name used in errors and logs
            work: Coroutine function receiving the open database session

        Returns:
            Whatever work returns, after the transaction commits

        Raises:
            StoreError: On SQLAlchemy failure or timeout (transaction rolled back)
        """

        async def _transaction() -> T:
            async with self.session_factory() as db:
                async with db.begin():
                    return await work(db)

        try:
            return await asyncio.wait_for(_transaction(), timeout=self.store_timeout)
        except asyncio.TimeoutError as e:
            raise StoreError(
                f"Store operation timed out after {self.store_timeout}s",
                operation=operation,
            ) from e
        except SQLAlchemyError as e:
            raise StoreError(
                f"Store operation failed: {type(e).__name__}",
                operation=operation,
            ) from e

    def resolve_session_id(self, name: str | None) -> str:
        """Derive the session id for a human-chosen meetup name."""
        return slugify_session_name(name)

    async def ensure_session(self, session_id: str | None) -> bool:
        """
        Create the session if it does not exist yet.

        Args:
            session_id: Session id

        Returns:
            bool: True if the session was created by this call

        Raises:
            ValidationError: If session_id is missing
            StoreError: If persistence fails
        """
        session_id = _require(session_id, "sessionId", "Session ID")
        created = await self._run(
            "ensure_session", lambda db: session_crud.ensure(db, session_id)
        )
        if created:
            logger.info("Session created", extra={"session_id": session_id})
        return created

    async def post_message(
        self,
        session_id: str | None,
        sender: Participant | None,
        content: str | None,
        location: Coordinates | None = None,
    ) -> MessageModel:
        """
        Post a chat message, creating the session on first use.

        When a location accompanies the message, the sender's location mark
        is refreshed in the same transaction.

        Args:
            session_id: Target session id
            sender: Posting participant
            content: Message text (empty string allowed)
            location: Optional current position of the sender

        Returns:
            MessageModel: The stored message

        Raises:
            ValidationError: If session_id, sender.id or content is missing,
                or the location is incomplete/out of range. Nothing is written.
            StoreError: If persistence fails. Nothing is written.
        """
        session_id = _require(session_id, "sessionId", "Session ID")
        if sender is None:
            raise ValidationError("Sender is required", field="sender")
        sender_id = _require(sender.id, "sender.id", "Sender ID")
        if content is None:
            raise ValidationError("Message content is required", field="message")
        coords = _validate_coordinates(location) if location is not None else None

        async def _work(db: AsyncSession) -> MessageModel:
            await session_crud.ensure(db, session_id)
            message = await message_crud.insert(
                db,
                session_id=session_id,
                sender_id=sender_id,
                sender_name=sender.name,
                content=content,
            )
            if coords is not None:
                await location_crud.upsert(
                    db,
                    session_id=session_id,
                    participant_id=sender_id,
                    participant_name=sender.name,
                    latitude=coords[0],
                    longitude=coords[1],
                )
            return message

        message = await self._run("post_message", _work)
        logger.debug(
            "Message posted",
            extra={"session_id": session_id, "message_id": message.id, "with_location": coords is not None},
        )
        return message

    async def update_location(
        self,
        session_id: str | None,
        participant: Participant | None,
        location: Coordinates | None,
    ) -> LocationMarkModel:
        """
        Record a participant's latest position, creating the session on first use.

        Args:
            session_id: Target session id
            participant: Participant sending the ping
            location: Current position

        Returns:
            LocationMarkModel: The participant's stored mark

        Raises:
            ValidationError: If any identifier or coordinate is missing or invalid
            StoreError: If persistence fails
        """
        session_id = _require(session_id, "sessionId", "Session ID")
        if participant is None:
            raise ValidationError("Sender is required", field="sender")
        participant_id = _require(participant.id, "sender.id", "Sender ID")
        if location is None:
            raise ValidationError("Location is required", field="location")
        lat, lon = _validate_coordinates(location)

        async def _work(db: AsyncSession) -> LocationMarkModel:
            await session_crud.ensure(db, session_id)
            return await location_crud.upsert(
                db,
                session_id=session_id,
                participant_id=participant_id,
                participant_name=participant.name,
                latitude=lat,
                longitude=lon,
            )

        return await self._run("update_location", _work)

    async def get_session_view(self, session_id: str | None) -> SessionView:
        """
        Read the latest messages and fresh locations of a session.

        Side-effect free; the two reads run concurrently on separate
        database sessions. An unknown session yields empty lists.

        Args:
            session_id: Session id

        Returns:
            SessionView: Up to 100 messages (newest first) and the locations
                updated within the freshness window

        Raises:
            ValidationError: If session_id is missing
            StoreError: If either read fails
        """
        session_id = _require(session_id, "sessionId", "Session ID")

        messages, locations = await asyncio.gather(
            self._run(
                "list_recent_messages",
                lambda db: message_crud.list_recent(db, session_id, MESSAGE_HISTORY_LIMIT),
            ),
            self._run(
                "list_fresh_locations",
                lambda db: location_crud.list_fresh(db, session_id, FRESHNESS_WINDOW),
            ),
        )
        return SessionView(
            session_id=session_id,
            messages=list(messages),
            locations=list(locations),
        )

    async def get_session(self, session_id: str | None) -> SessionModel:
        """
        Get session metadata.

        Unlike writes, a lookup never creates the session.

        Args:
            session_id: Session id

        Returns:
            SessionModel: The stored session

        Raises:
            ValidationError: If session_id is missing
            SessionNotFoundError: If the session does not exist
            StoreError: If persistence fails
        """
        session_id = _require(session_id, "sessionId", "Session ID")
        session = await self._run(
            "get_session", lambda db: session_crud.get_by_id(db, session_id)
        )
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def rename_session(self, session_id: str | None, name: str | None) -> bool:
        """
        Set a session's display name.

        Renaming a session that does not exist updates nothing and is not an
        error; callers must not use this to check existence.

        Args:
            session_id: Session id
            name: New display name

        Returns:
            bool: True if a session was renamed

        Raises:
            ValidationError: If session_id or name is missing
            StoreError: If persistence fails
        """
        session_id = _require(session_id, "sessionId", "Session ID")
        if name is None:
            raise ValidationError("Session name is required", field="name")

        renamed = await self._run(
            "rename_session", lambda db: session_crud.rename(db, session_id, name)
        )
        if not renamed:
            logger.debug("Rename matched no session", extra={"session_id": session_id})
        return renamed

    async def reap_expired(self) -> int:
        """
        Delete sessions past the retention window along with their children.

        Runs as one transaction: either every expired session and its
        messages and locations are removed, or nothing is.

        Returns:
            int: Number of sessions deleted

        Raises:
            StoreError: If the sweep fails (callers at the host boundary log and continue)
        """
        reaped = await self._run(
            "reap_expired", lambda db: session_crud.reap_expired(db, RETENTION_WINDOW)
        )
        if reaped:
            logger.info("Reaped expired sessions", extra={"count": reaped})
        return reaped
