"""
Unit Tests for the SQLAlchemy Note Repository.

Uses a mocked session to check absent-record handling and
error translation without a database.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from notes_api.core.exceptions import StorageError
from notes_api.repositories.base import NoteRepository
from notes_api.repositories.note import SqlAlchemyNoteRepository


@pytest.fixture
def repo(mock_db_session):
    return SqlAlchemyNoteRepository(mock_db_session)


class TestInterface:
    """Tests for the repository interface."""

    def test_implements_note_repository(self, repo):
        assert isinstance(repo, NoteRepository)

    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            NoteRepository()


class TestAbsentRecords:
    """Absent notes yield None and never write."""

    @pytest.mark.asyncio
    async def test_get_by_id_returns_none(self, repo, mock_db_session, mock_db_result):
        mock_db_session.execute.return_value = mock_db_result

        assert await repo.get_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_update_returns_none_without_flush(self, repo, mock_db_session, mock_db_result):
        mock_db_session.execute.return_value = mock_db_result

        assert await repo.update("missing", title="Renamed") is None
        mock_db_session.flush.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_returns_none_without_delete(self, repo, mock_db_session, mock_db_result):
        mock_db_session.execute.return_value = mock_db_result

        assert await repo.remove("missing") is None
        mock_db_session.delete.assert_not_called()


class TestUpdate:
    """Tests for merge semantics on a loaded note."""

    @pytest.mark.asyncio
    async def test_ignores_store_managed_fields(
        self, repo, mock_db_session, mock_db_result, note_factory,
    ):
        note = note_factory()
        original_id = note.id
        original_created = note.created_at
        mock_db_result.scalar_one_or_none.return_value = note
        mock_db_session.execute.return_value = mock_db_result

        await repo.update(note.id, id="other", created_at=None, title="Renamed")

        assert note.id == original_id
        assert note.created_at == original_created
        assert note.title == "Renamed"

    @pytest.mark.asyncio
    async def test_refreshes_updated_at(
        self, repo, mock_db_session, mock_db_result, note_factory,
    ):
        note = note_factory()
        before = note.updated_at
        mock_db_result.scalar_one_or_none.return_value = note
        mock_db_session.execute.return_value = mock_db_result

        await repo.update(note.id, has_favorited=False)

        assert note.updated_at > before


class TestStorageErrors:
    """SQLAlchemy failures surface as StorageError."""

    @pytest.mark.asyncio
    async def test_query_failure(self, repo, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(StorageError) as exc_info:
            await repo.get_many(1, 50, False)

        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_lookup_failure(self, repo, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(StorageError):
            await repo.get_by_id("note-1")

    @pytest.mark.asyncio
    async def test_insert_failure(self, repo, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("constraint"))

        with pytest.raises(StorageError, match="add"):
            await repo.add(
                title="Groceries",
                description="Milk.",
                has_favorited=False,
                color=None,
            )
