"""
Note Service.

Domain facade over the note store. It applies defaults for omitted
list arguments and otherwise forwards every call unchanged.
"""

from notes_api.core.pagination import DEFAULT_LIMIT, DEFAULT_PAGE
from notes_api.models.note import Note
from notes_api.repositories.base import NoteRepository
from notes_api.schemas.note import NoteCreate, NoteUpdate
from notes_api.services.base import BaseService


class NoteService(BaseService):
    """Service for note operations."""

    def __init__(self, repository: NoteRepository) -> None:
        super().__init__()
        self.repo = repository

    async def get_many(
        self,
        page: int | None = None,
        limit: int | None = None,
        has_favorited: bool | None = None,
    ) -> list[Note]:
        """
        List notes filtered by favorite flag.

        Args:
            page: 1-based page number (defaults to the first page)
            limit: Page size (defaults to 50)
            has_favorited: Favorite flag to match (defaults to False)

        Returns:
            List of notes, most recently updated first
        """
        page = DEFAULT_PAGE if page is None else page
        limit = DEFAULT_LIMIT if limit is None else limit
        has_favorited = False if has_favorited is None else has_favorited

        self._log_debug(
            "Listing notes",
            page=page,
            limit=limit,
            has_favorited=has_favorited,
        )
        return await self.repo.get_many(page, limit, has_favorited)

    async def get_by_id(self, note_id: str) -> Note | None:
        """Get a note by ID, or None when it does not exist."""
        self._log_debug("Fetching note", note_id=note_id)
        return await self.repo.get_by_id(note_id)

    async def add(self, data: NoteCreate) -> Note:
        """
        Create a new note.

        Args:
            data: Validated creation payload

        Returns:
            Created note
        """
        self._log_operation("Creating note", title=data.title)

        note = await self.repo.add(
            title=data.title,
            description=data.description,
            has_favorited=data.has_favorited,
            color=data.color,
        )

        self._log_debug("Note created", note_id=note.id)
        return note

    async def update(self, note_id: str, data: NoteUpdate) -> Note | None:
        """
        Update an existing note.

        Only the fields present in the payload are written.

        Returns:
            Updated note, or None when it does not exist
        """
        changes = data.changes()
        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(changes.keys()),
        )
        return await self.repo.update(note_id, **changes)

    async def remove(self, note_id: str) -> Note | None:
        """
        Delete a note.

        Returns:
            The deleted note, or None when it does not exist
        """
        self._log_operation("Deleting note", note_id=note_id)
        return await self.repo.remove(note_id)
