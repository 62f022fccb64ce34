"""
MarkNotes Backend — Note Store Tests
=======================================

What:  Tests for SQLNoteStore against a real in-memory SQLite database.
How:   Each test gets an empty database (see conftest.db_engine).

What we test:
    ✅ Ids are assigned, start at 1, and never collide
    ✅ Title and content round-trip byte-for-byte
    ✅ find_all returns every note once, in creation order
    ✅ Unknown ids raise NotFoundError (not a fault, not an empty Note),
       including ids too large for the column
    ✅ Concurrent creates on separate connections get distinct ids
    ✅ Driver errors surface as StorageError, with the session rolled back
"""

import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from marknotes.exceptions import NotFoundError, StorageError
from marknotes.models.note import MAX_NOTE_ID, Note
from marknotes.stores import SQLNoteStore


class TestNoteStoreCreate:
    """Identity assignment and durability."""

    @pytest.mark.asyncio
    async def test_create_assigns_first_id(self, note_store, groceries):
        """The first note in an empty store gets id 1."""
        note = await note_store.create(**groceries)

        assert note.id == 1
        assert note.title == "Groceries"
        assert note.content == "- milk\n- eggs\n"

    @pytest.mark.asyncio
    async def test_ids_are_pairwise_distinct(self, note_store):
        """N creates yield N distinct ids."""
        notes = [await note_store.create(f"note {i}", f"body {i}") for i in range(25)]
        ids = [note.id for note in notes]

        assert len(set(ids)) == 25
        assert ids == sorted(ids)

    @pytest.mark.asyncio
    async def test_ids_distinct_across_sessions(self, session_factory):
        """Stores on separate sessions share one id sequence."""
        async with session_factory() as first, session_factory() as second:
            a = await SQLNoteStore(first).create("a", "")
            b = await SQLNoteStore(second).create("b", "")

        assert a.id != b.id

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, file_db_engine):
        """Creates racing on separate connections never share an id."""
        factory = async_sessionmaker(file_db_engine, class_=AsyncSession, expire_on_commit=False)

        async def create_one(i: int) -> int:
            async with factory() as session:
                note = await SQLNoteStore(session).create(f"note {i}", f"body {i}")
                return note.id

        ids = await asyncio.gather(*(create_one(i) for i in range(10)))

        async with factory() as session:
            row_count = await session.scalar(select(func.count()).select_from(Note))

        assert len(set(ids)) == 10
        assert row_count == 10

    @pytest.mark.asyncio
    async def test_created_note_visible_to_new_session(self, note_store, session_factory):
        """create() commits: a different session sees the note right away."""
        note = await note_store.create("durable", "yes")

        async with session_factory() as other:
            found = await SQLNoteStore(other).find_by_id(note.id)

        assert found.title == "durable"

    @pytest.mark.asyncio
    async def test_empty_title_and_content_allowed(self, note_store):
        """Neither field is validated."""
        note = await note_store.create("", "")
        found = await note_store.find_by_id(note.id)

        assert found.title == ""
        assert found.content == ""


class TestNoteStoreRoundTrip:
    """Content is stored verbatim."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            "# Heading\n\nFirst paragraph.\n\nSecond paragraph.\n",
            "  leading spaces\ttabs\r\nwindows line endings\r\n",
            "<script>alert('x')</script> & <b>raw html</b>",
            "unicode: café, 東京, emoji 📝",
        ],
    )
    async def test_content_round_trips_unchanged(self, note_store, session_factory, content):
        created = await note_store.create("round trip", content)
        # A fresh session reads the row back from the database, not the identity map
        async with session_factory() as other:
            found = await SQLNoteStore(other).find_by_id(created.id)

        assert found.content == content
        assert found.title == "round trip"

    @pytest.mark.asyncio
    async def test_long_content_not_truncated(self, note_store):
        """Content has no length cap."""
        content = "word " * 50_000
        created = await note_store.create("long", content)
        found = await note_store.find_by_id(created.id)

        assert len(found.content) == len(content)


class TestNoteStoreFind:
    """find_by_id and find_all."""

    @pytest.mark.asyncio
    async def test_find_all_empty(self, note_store):
        assert await note_store.find_all() == []

    @pytest.mark.asyncio
    async def test_find_all_in_creation_order(self, note_store):
        """A, B, C created in order come back exactly once each, in that order."""
        for title in ("A", "B", "C"):
            await note_store.create(title, f"content {title}")

        notes = await note_store.find_all()

        assert [n.title for n in notes] == ["A", "B", "C"]
        assert [n.content for n in notes] == ["content A", "content B", "content C"]
        assert len({n.id for n in notes}) == 3

    @pytest.mark.asyncio
    async def test_two_notes_listed_after_create(self, note_store):
        first = await note_store.create("first", "1")
        second = await note_store.create("second", "2")

        assert first.id != second.id
        assert [n.id for n in await note_store.find_all()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_find_by_id_unknown_raises_not_found(self, note_store):
        """Ids never returned by create() yield NotFoundError."""
        await note_store.create("only", "note")

        with pytest.raises(NotFoundError) as excinfo:
            await note_store.find_by_id(999)

        assert excinfo.value.resource_id == "999"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", [0, -1, MAX_NOTE_ID + 1, 2**63])
    async def test_find_by_id_out_of_range_raises_not_found(self, note_store, note_id):
        """Ids the column cannot hold are unknown ids, not driver faults."""
        await note_store.create("only", "note")

        with pytest.raises(NotFoundError) as excinfo:
            await note_store.find_by_id(note_id)

        assert excinfo.value.resource_id == str(note_id)

    @pytest.mark.asyncio
    async def test_find_by_id_on_empty_store(self, note_store):
        with pytest.raises(NotFoundError):
            await note_store.find_by_id(1)


class TestNoteStoreFailures:
    """Driver errors become StorageError, distinct from NotFoundError."""

    @staticmethod
    def _db_down():
        return OperationalError("SELECT", {}, Exception("database is unreachable"))

    @pytest.mark.asyncio
    async def test_find_by_id_storage_error(self, mock_db_session):
        mock_db_session.execute.side_effect = self._db_down()
        store = SQLNoteStore(mock_db_session)

        with pytest.raises(StorageError) as excinfo:
            await store.find_by_id(1)

        assert not isinstance(excinfo.value, NotFoundError)
        assert excinfo.value.operation == "find_by_id"
        mock_db_session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_find_all_storage_error(self, mock_db_session):
        mock_db_session.execute.side_effect = self._db_down()

        with pytest.raises(StorageError):
            await SQLNoteStore(mock_db_session).find_all()

    @pytest.mark.asyncio
    async def test_create_storage_error(self, mock_db_session):
        mock_db_session.flush.side_effect = self._db_down()

        with pytest.raises(StorageError) as excinfo:
            await SQLNoteStore(mock_db_session).create("t", "c")

        assert excinfo.value.operation == "create"
        mock_db_session.commit.assert_not_awaited()
        mock_db_session.rollback.assert_awaited_once()
