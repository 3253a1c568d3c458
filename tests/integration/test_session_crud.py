"""
Test suite for SessionCRUD database operations.

Tests idempotent creation (including racing callers), lookup, rename and
the cascading retention sweep against a real SQLite database.

System role: Verification of session persistence layer
"""

import asyncio
from datetime import timedelta

import pytest
from sqlalchemy.exc import CompileError

from meetup.boundary.db.CRUD import base_crud, location_crud, message_crud, session_crud
from meetup.boundary.db.CRUD.session_crud import SessionCRUD
from meetup.boundary.db.models import LocationMarkModel, MessageModel, SessionModel


class TestSessionCRUDInit:
    """Test suite for SessionCRUD initialization."""

    def test_init_should_set_model_to_session_model(self) -> None:
        """Test SessionCRUD initializes with SessionModel."""
        crud = SessionCRUD()

        assert crud.model == SessionModel


class TestSessionCRUDEnsure:
    """Test suite for SessionCRUD.ensure() method."""

    @pytest.mark.asyncio
    async def test_ensure_should_create_missing_session(self, db, count_rows) -> None:
        """Test ensure inserts a row for an unknown id."""
        await session_crud.ensure(db, "friday-drinks")
        await db.commit()

        assert await count_rows(SessionModel, id="friday-drinks") == 1

    @pytest.mark.asyncio
    async def test_ensure_should_be_idempotent(self, session_factory, count_rows) -> None:
        """Test repeated ensure keeps one row and the first created_at."""
        async with session_factory() as db, db.begin():
            await session_crud.ensure(db, "friday-drinks")
        async with session_factory() as db:
            first = await session_crud.get_by_id(db, "friday-drinks")

        for _ in range(4):
            async with session_factory() as db, db.begin():
                await session_crud.ensure(db, "friday-drinks")

        async with session_factory() as db:
            again = await session_crud.get_by_id(db, "friday-drinks")

        assert await count_rows(SessionModel) == 1
        assert again.created_at == first.created_at

    @pytest.mark.asyncio
    async def test_ensure_should_collapse_concurrent_inserts(
        self, session_factory, count_rows
    ) -> None:
        """Test racing callers on the same new id all succeed with one row stored."""

        async def _ensure() -> None:
            async with session_factory() as db, db.begin():
                await session_crud.ensure(db, "race")

        await asyncio.gather(*(_ensure() for _ in range(5)))

        assert await count_rows(SessionModel, id="race") == 1


class TestSessionCRUDGetAndRename:
    """Test suite for SessionCRUD lookup and rename."""

    @pytest.mark.asyncio
    async def test_get_by_id_should_return_none_when_not_found(self, db) -> None:
        """Test get_by_id returns None for unknown ids."""
        assert await session_crud.get_by_id(db, "nope") is None

    @pytest.mark.asyncio
    async def test_rename_should_update_existing_session(self, db) -> None:
        """Test rename sets the display name and reports a match."""
        await session_crud.ensure(db, "friday-drinks")

        renamed = await session_crud.rename(db, "friday-drinks", "Friday Drinks")
        session = await session_crud.get_by_id(db, "friday-drinks")

        assert renamed is True
        assert session.name == "Friday Drinks"

    @pytest.mark.asyncio
    async def test_rename_should_report_no_match_for_missing_session(self, db) -> None:
        """Test rename of an unknown id updates nothing and creates nothing."""
        renamed = await session_crud.rename(db, "ghost", "Ghost")

        assert renamed is False
        assert await session_crud.get_by_id(db, "ghost") is None


class TestSessionCRUDReapExpired:
    """Test suite for SessionCRUD.reap_expired() method."""

    @pytest.mark.asyncio
    async def test_reap_expired_should_cascade_to_children(
        self, session_factory, backdate, count_rows
    ) -> None:
        """Test an expired session disappears with its messages and locations."""
        async with session_factory() as db, db.begin():
            for session_id in ("old", "recent"):
                await session_crud.ensure(db, session_id)
                for i in range(3):
                    await message_crud.insert(db, session_id, "p1", "Ann", f"msg {i}")
                await location_crud.upsert(db, session_id, "p1", "Ann", 51.5, -0.12)
                await location_crud.upsert(db, session_id, "p2", "Bob", 51.6, -0.13)

        await backdate(SessionModel, "created_at", timedelta(hours=25), id="old")
        await backdate(SessionModel, "created_at", timedelta(hours=1), id="recent")

        async with session_factory() as db, db.begin():
            reaped = await session_crud.reap_expired(db, timedelta(hours=24))

        assert reaped == 1
        assert await count_rows(SessionModel, id="old") == 0
        assert await count_rows(MessageModel, session_id="old") == 0
        assert await count_rows(LocationMarkModel, session_id="old") == 0
        assert await count_rows(SessionModel, id="recent") == 1
        assert await count_rows(MessageModel, session_id="recent") == 3
        assert await count_rows(LocationMarkModel, session_id="recent") == 2

    @pytest.mark.asyncio
    async def test_reap_expired_should_keep_everything_when_nothing_expired(self, db) -> None:
        """Test a sweep with no expired sessions deletes nothing."""
        await session_crud.ensure(db, "fresh")

        reaped = await session_crud.reap_expired(db, timedelta(hours=24))

        assert reaped == 0
        assert await session_crud.get_by_id(db, "fresh") is not None

    @pytest.mark.asyncio
    async def test_reap_expired_should_roll_back_as_a_unit(
        self, session_factory, backdate, count_rows
    ) -> None:
        """Test a sweep whose transaction aborts leaves session and children intact."""
        async with session_factory() as db, db.begin():
            await session_crud.ensure(db, "old")
            await message_crud.insert(db, "old", "p1", "Ann", "hello")
        await backdate(SessionModel, "created_at", timedelta(hours=30), id="old")

        with pytest.raises(RuntimeError):
            async with session_factory() as db, db.begin():
                await session_crud.reap_expired(db, timedelta(hours=24))
                raise RuntimeError("abort after sweep")

        assert await count_rows(SessionModel, id="old") == 1
        assert await count_rows(MessageModel, session_id="old") == 1


class TestSessionCRUDDialects:
    """Test suite for dialect selection of ON CONFLICT statements."""

    @pytest.mark.asyncio
    async def test_unsupported_dialect_should_raise_compile_error(self, db, monkeypatch) -> None:
        """Test a store without ON CONFLICT support fails with a SQLAlchemy error."""
        monkeypatch.setattr(base_crud, "_UPSERT_DIALECTS", {})

        with pytest.raises(CompileError):
            await session_crud.ensure(db, "s1")
