"""
Note Repository.

SQLAlchemy adapter for the note store. Every public method issues its
own query against the session it was constructed with; committing is
left to the session owner.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.core.exceptions import StorageError
from notes_api.core.logging import get_logger
from notes_api.core.pagination import page_offset
from notes_api.core.utils import utc_now
from notes_api.models.note import Note
from notes_api.repositories.base import NoteRepository

logger = get_logger(__name__)

# Set by the store itself, never by callers
_MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class SqlAlchemyNoteRepository(NoteRepository):
    """
    Note store backed by an async SQLAlchemy session.

    update() and remove() read the note before writing. The read and the
    write are separate statements, so a concurrent request can change or
    delete the row in between.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def _db_operation(self, operation: str) -> AsyncIterator[None]:
        """Translate SQLAlchemy failures into StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise StorageError(f"Database operation failed: {operation}") from e

    async def get_many(
        self,
        page: int,
        limit: int,
        has_favorited: bool,
    ) -> list[Note]:
        """
        List one page of notes.

        Args:
            page: 1-based page number, values below 1 mean the first page
            limit: Maximum number of notes to return
            has_favorited: Favorite flag to match exactly

        Returns:
            Notes ordered by updated_at, newest first
        """
        async with self._db_operation("get_many"):
            result = await self.session.execute(
                select(Note)
                .where(Note.has_favorited == has_favorited)
                .order_by(Note.updated_at.desc())
                .limit(limit)
                .offset(page_offset(page, limit))
            )
            return list(result.scalars().all())

    async def get_by_id(self, note_id: str) -> Note | None:
        async with self._db_operation("get_by_id"):
            result = await self.session.execute(
                select(Note).where(Note.id == str(note_id))
            )
            return result.scalar_one_or_none()

    async def add(self, **fields: Any) -> Note:
        """
        Insert a new note.

        created_at and updated_at receive the same timestamp.
        """
        now = utc_now()
        note = Note(id=str(uuid4()), created_at=now, updated_at=now, **fields)

        async with self._db_operation("add"):
            self.session.add(note)
            await self.session.flush()
            await self.session.refresh(note)
        return note

    async def update(self, note_id: str, **fields: Any) -> Note | None:
        """
        Merge fields over an existing note.

        Fields not passed keep their stored values. updated_at is
        refreshed even when no value changes.
        """
        note = await self.get_by_id(note_id)
        if note is None:
            return None

        for key, value in fields.items():
            if key not in _MANAGED_FIELDS and hasattr(note, key):
                setattr(note, key, value)
        note.updated_at = utc_now()

        async with self._db_operation("update"):
            await self.session.flush()
            await self.session.refresh(note)
        return note

    async def remove(self, note_id: str) -> Note | None:
        """Delete a note, returning the state it had before deletion."""
        note = await self.get_by_id(note_id)
        if note is None:
            return None

        async with self._db_operation("remove"):
            await self.session.delete(note)
            await self.session.flush()
        return note
