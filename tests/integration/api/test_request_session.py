"""
Integration Tests for the request session lifecycle.

Unlike the other API tests, these go through the real get_db_session
dependency: each request opens its own session from the test engine
and commits before the response is sent.
"""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notes_api.core import database
from notes_api.repositories.note import SqlAlchemyNoteRepository

NEW_NOTE = {
    "title": "Groceries",
    "description": "Milk, eggs and bread.",
    "hasFavorited": False,
}


def failing_commit() -> AsyncMock:
    return AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("database is locked")))


@pytest.fixture
async def committing_client(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Client whose requests each get a real, committing session."""
    from notes_api.main import create_app

    with patch.object(database, "get_session_factory", return_value=db_session_factory):
        transport = ASGITransport(app=create_app())
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


class TestCommitBeforeResponse:
    """Writes are committed before the client sees success."""

    @pytest.mark.asyncio
    async def test_created_note_is_committed(self, committing_client, db_session_factory, api):
        created = api.assert_ok(await committing_client.post("/notes/add", json=NEW_NOTE), 201)

        async with db_session_factory() as session:
            stored = await SqlAlchemyNoteRepository(session).get_by_id(created["id"])

        assert stored is not None
        assert stored.title == "Groceries"

    @pytest.mark.asyncio
    async def test_failed_commit_on_create_is_500(self, committing_client, api):
        with patch.object(AsyncSession, "commit", failing_commit()):
            response = await committing_client.post("/notes/add", json=NEW_NOTE)

        api.assert_error(response, 500, "SYS_STORAGE_ERROR")
        assert api.assert_ok(await committing_client.get("/notes/list")) == []

    @pytest.mark.asyncio
    async def test_failed_commit_on_delete_keeps_note(self, committing_client, api):
        created = api.assert_ok(await committing_client.post("/notes/add", json=NEW_NOTE), 201)

        with patch.object(AsyncSession, "commit", failing_commit()):
            response = await committing_client.delete(f"/notes/{created['id']}")

        api.assert_error(response, 500, "SYS_STORAGE_ERROR")
        api.assert_ok(await committing_client.get(f"/notes/{created['id']}"))
