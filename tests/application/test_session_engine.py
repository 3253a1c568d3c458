"""
Test suite for SessionEngine.

Exercises every engine operation against a real SQLite store: lazy session
creation, validation before writes, the composite view with its freshness
window, rename semantics, the retention sweep and store failure mapping.

System role: Verification of session synchronization orchestration
"""

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy.exc import CompileError, OperationalError

from meetup.application.services import (
    FRESHNESS_WINDOW,
    MESSAGE_HISTORY_LIMIT,
    RETENTION_WINDOW,
    SessionEngine,
)
from meetup.boundary.db.CRUD import base_crud
from meetup.boundary.db.models import LocationMarkModel, MessageModel, SessionModel
from meetup.core.exceptions import (
    NotFoundError,
    SessionNotFoundError,
    StoreError,
    ValidationError,
)
from meetup.core.types import Coordinates, Participant

ANN = Participant(id="p-ann", name="Ann")
BOB = Participant(id="p-bob", name="Bob")
LONDON = Coordinates(latitude=51.5074, longitude=-0.1278)
PARIS = Coordinates(latitude=48.8566, longitude=2.3522)


class TestSessionEnginePolicy:
    """Test suite for the fixed policy constants."""

    def test_policy_constants_should_match_product_rules(self) -> None:
        """Test freshness, retention and history cap values."""
        assert FRESHNESS_WINDOW == timedelta(minutes=5)
        assert RETENTION_WINDOW == timedelta(hours=24)
        assert MESSAGE_HISTORY_LIMIT == 100


class TestSessionEnginePostMessage:
    """Test suite for SessionEngine.post_message()."""

    @pytest.mark.asyncio
    async def test_post_message_should_create_session_on_first_use(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test posting to an unknown session materializes it."""
        message = await session_engine.post_message("friday-drinks", ANN, "Hi all")

        assert message.id is not None
        assert await count_rows(SessionModel, id="friday-drinks") == 1
        assert await count_rows(MessageModel, session_id="friday-drinks") == 1

    @pytest.mark.asyncio
    async def test_post_message_with_location_should_refresh_sender_mark(
        self, session_engine: SessionEngine
    ) -> None:
        """Test a message carrying a location upserts the sender's mark."""
        await session_engine.post_message("s1", ANN, "Here", location=LONDON)
        await session_engine.post_message("s1", ANN, "Moved", location=PARIS)

        view = await session_engine.get_session_view("s1")

        assert len(view.locations) == 1
        mark = view.locations[0]
        assert mark.participant_id == ANN.id
        assert mark.participant_name == ANN.name
        assert (mark.latitude, mark.longitude) == (PARIS.latitude, PARIS.longitude)

    @pytest.mark.asyncio
    async def test_post_message_without_location_should_not_touch_locations(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test a plain message writes no location mark."""
        await session_engine.post_message("s1", ANN, "Hello")

        assert await count_rows(LocationMarkModel) == 0

    @pytest.mark.asyncio
    async def test_post_message_should_accept_empty_content(
        self, session_engine: SessionEngine
    ) -> None:
        """Test empty text is stored; only missing content is rejected."""
        message = await session_engine.post_message("s1", ANN, "")

        assert message.content == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "session_id,sender,content,field",
        [
            (None, ANN, "hi", "sessionId"),
            ("   ", ANN, "hi", "sessionId"),
            ("s1", None, "hi", "sender"),
            ("s1", Participant(id=None, name="Ann"), "hi", "sender.id"),
            ("s1", Participant(id="", name="Ann"), "hi", "sender.id"),
            ("s1", ANN, None, "message"),
        ],
    )
    async def test_post_message_should_reject_missing_fields_without_writing(
        self, session_engine: SessionEngine, count_rows, session_id, sender, content, field
    ) -> None:
        """Test missing identifiers raise ValidationError and leave the store empty."""
        with pytest.raises(ValidationError) as exc_info:
            await session_engine.post_message(session_id, sender, content, location=LONDON)

        assert exc_info.value.field == field
        assert await count_rows(SessionModel) == 0
        assert await count_rows(MessageModel) == 0
        assert await count_rows(LocationMarkModel) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "location",
        [
            Coordinates(latitude=None, longitude=2.0),
            Coordinates(latitude=91.0, longitude=2.0),
            Coordinates(latitude=10.0, longitude=-180.5),
            Coordinates(latitude=float("nan"), longitude=2.0),
        ],
    )
    async def test_post_message_should_reject_invalid_location_without_writing(
        self, session_engine: SessionEngine, count_rows, location
    ) -> None:
        """Test bad coordinates fail validation before the message is stored."""
        with pytest.raises(ValidationError):
            await session_engine.post_message("s1", ANN, "hi", location=location)

        assert await count_rows(MessageModel) == 0
        assert await count_rows(SessionModel) == 0


class TestSessionEngineUpdateLocation:
    """Test suite for SessionEngine.update_location()."""

    @pytest.mark.asyncio
    async def test_update_location_should_create_session_and_mark(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test a location ping alone materializes the session."""
        mark = await session_engine.update_location("s1", BOB, LONDON)

        assert mark.participant_id == BOB.id
        assert await count_rows(SessionModel, id="s1") == 1
        assert await count_rows(MessageModel) == 0

    @pytest.mark.asyncio
    async def test_update_location_should_overwrite_previous_mark(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test repeated pings keep a single mark with the latest coordinates."""
        first = await session_engine.update_location("s1", BOB, LONDON)
        second = await session_engine.update_location("s1", BOB, PARIS)

        assert await count_rows(LocationMarkModel, session_id="s1") == 1
        assert second.latitude == PARIS.latitude
        assert second.updated_at >= first.updated_at

    @pytest.mark.asyncio
    async def test_update_location_should_require_location(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test a ping without coordinates is rejected."""
        with pytest.raises(ValidationError):
            await session_engine.update_location("s1", BOB, None)

        assert await count_rows(SessionModel) == 0


class TestSessionEngineGetSessionView:
    """Test suite for SessionEngine.get_session_view()."""

    @pytest.mark.asyncio
    async def test_get_session_view_should_return_empty_for_unknown_session(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test polling before anyone posted yields empty lists, not an error."""
        view = await session_engine.get_session_view("nonexistent")

        assert view.session_id == "nonexistent"
        assert view.messages == []
        assert view.locations == []
        assert await count_rows(SessionModel) == 0

    @pytest.mark.asyncio
    async def test_get_session_view_should_require_session_id(
        self, session_engine: SessionEngine
    ) -> None:
        """Test a missing id raises ValidationError."""
        with pytest.raises(ValidationError):
            await session_engine.get_session_view(None)

    @pytest.mark.asyncio
    async def test_get_session_view_should_order_messages_newest_first(
        self, session_engine: SessionEngine
    ) -> None:
        """Test the view lists messages in reverse posting order."""
        for text in ("one", "two", "three"):
            await session_engine.post_message("s1", ANN, text)

        view = await session_engine.get_session_view("s1")

        assert [m.content for m in view.messages] == ["three", "two", "one"]

    @pytest.mark.asyncio
    async def test_get_session_view_should_hide_stale_locations(
        self, session_engine: SessionEngine, backdate
    ) -> None:
        """Test participants silent for longer than the window drop out of the view."""
        await session_engine.update_location("s1", ANN, LONDON)
        await session_engine.update_location("s1", BOB, PARIS)
        await backdate(
            LocationMarkModel, "updated_at", timedelta(minutes=4, seconds=59), participant_id=ANN.id
        )
        await backdate(
            LocationMarkModel, "updated_at", timedelta(minutes=5, seconds=1), participant_id=BOB.id
        )

        view = await session_engine.get_session_view("s1")

        assert [m.participant_id for m in view.locations] == [ANN.id]

    @pytest.mark.asyncio
    async def test_get_session_view_should_be_read_only(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test repeated polling changes nothing in the store."""
        await session_engine.post_message("s1", ANN, "hi", location=LONDON)

        for _ in range(3):
            await session_engine.get_session_view("s1")

        assert await count_rows(SessionModel) == 1
        assert await count_rows(MessageModel) == 1
        assert await count_rows(LocationMarkModel) == 1


class TestSessionEngineGetSession:
    """Test suite for SessionEngine.get_session()."""

    @pytest.mark.asyncio
    async def test_get_session_should_raise_not_found_for_unknown_id(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test a bare lookup never creates the session."""
        with pytest.raises(SessionNotFoundError) as exc_info:
            await session_engine.get_session("ghost")

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.details["session_id"] == "ghost"
        assert await count_rows(SessionModel) == 0

    @pytest.mark.asyncio
    async def test_get_session_should_return_existing_session(
        self, session_engine: SessionEngine
    ) -> None:
        """Test lookup after the first message returns metadata."""
        await session_engine.post_message("s1", ANN, "hi")

        session = await session_engine.get_session("s1")

        assert session.id == "s1"
        assert session.name is None
        assert session.created_at is not None


class TestSessionEngineRenameSession:
    """Test suite for SessionEngine.rename_session()."""

    @pytest.mark.asyncio
    async def test_rename_session_should_update_name(self, session_engine: SessionEngine) -> None:
        """Test renaming an existing session."""
        await session_engine.ensure_session("friday-drinks")

        renamed = await session_engine.rename_session("friday-drinks", "Friday Drinks")
        session = await session_engine.get_session("friday-drinks")

        assert renamed is True
        assert session.name == "Friday Drinks"

    @pytest.mark.asyncio
    async def test_rename_session_should_silently_skip_missing_session(
        self, session_engine: SessionEngine, count_rows
    ) -> None:
        """Test renaming an unknown id is a no-op, not an error."""
        renamed = await session_engine.rename_session("ghost", "Ghost")

        assert renamed is False
        assert await count_rows(SessionModel) == 0

    @pytest.mark.asyncio
    async def test_rename_session_should_require_name(self, session_engine: SessionEngine) -> None:
        """Test a missing name raises ValidationError."""
        with pytest.raises(ValidationError):
            await session_engine.rename_session("s1", None)


class TestSessionEngineEnsureAndResolve:
    """Test suite for ensure_session() and resolve_session_id()."""

    @pytest.mark.asyncio
    async def test_ensure_session_should_report_creation_once(
        self, session_engine: SessionEngine
    ) -> None:
        """Test only the first call creates the session."""
        assert await session_engine.ensure_session("s1") is True
        assert await session_engine.ensure_session("s1") is False

    def test_resolve_session_id_should_slugify_name(self, session_engine: SessionEngine) -> None:
        """Test meetup names map to shared session ids."""
        assert session_engine.resolve_session_id("Friday  Drinks") == "friday-drinks"


class TestSessionEngineReapExpired:
    """Test suite for SessionEngine.reap_expired()."""

    @pytest.mark.asyncio
    async def test_reap_expired_should_remove_old_session_and_children(
        self, session_engine: SessionEngine, backdate, count_rows
    ) -> None:
        """Test a 25h-old session with 3 messages and 2 marks is gone; a 1h-old one stays."""
        for i in range(3):
            await session_engine.post_message("old", ANN, f"msg {i}", location=LONDON)
        await session_engine.update_location("old", BOB, PARIS)
        await session_engine.post_message("recent", ANN, "still here")
        await backdate(SessionModel, "created_at", timedelta(hours=25), id="old")
        await backdate(SessionModel, "created_at", timedelta(hours=1), id="recent")

        reaped = await session_engine.reap_expired()

        assert reaped == 1
        assert await count_rows(SessionModel, id="old") == 0
        assert await count_rows(MessageModel, session_id="old") == 0
        assert await count_rows(LocationMarkModel, session_id="old") == 0
        assert await count_rows(MessageModel, session_id="recent") == 1

        view = await session_engine.get_session_view("old")
        assert view.messages == []
        assert view.locations == []


class TestSessionEngineStoreFailures:
    """Test suite for store failure mapping."""

    @pytest.mark.asyncio
    async def test_sqlalchemy_error_should_surface_as_store_error(self) -> None:
        """Test database failures are raised as StoreError with the operation name."""

        def broken_factory():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        engine = SessionEngine(session_factory=broken_factory, store_timeout=1.0)

        with pytest.raises(StoreError) as exc_info:
            await engine.post_message("s1", ANN, "hi")

        assert exc_info.value.operation == "post_message"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_slow_store_should_time_out_as_store_error(self, session_factory) -> None:
        """Test operations exceeding the store timeout fail instead of hanging."""
        engine = SessionEngine(session_factory=session_factory, store_timeout=0.05)

        async def slow(db):
            await asyncio.sleep(1)

        with pytest.raises(StoreError) as exc_info:
            await engine._run("slow_operation", slow)

        assert "timed out" in exc_info.value.message
        assert exc_info.value.operation == "slow_operation"

    @pytest.mark.asyncio
    async def test_unsupported_store_dialect_should_surface_as_store_error(
        self, session_engine: SessionEngine, monkeypatch, count_rows
    ) -> None:
        """Test a store without ON CONFLICT support fails as StoreError, writing nothing."""
        monkeypatch.setattr(base_crud, "_UPSERT_DIALECTS", {})

        with pytest.raises(StoreError) as exc_info:
            await session_engine.post_message("s1", ANN, "hi")

        assert exc_info.value.operation == "post_message"
        assert isinstance(exc_info.value.__cause__, CompileError)
        assert await count_rows(SessionModel) == 0
