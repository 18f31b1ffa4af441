"""
Note Repository Interface.

The capability set every note persistence adapter provides. Services
depend on this interface only, so a storage backend can be swapped
without touching the service or the routers.

Absent records are reported as None, never raised.
"""

from abc import ABC, abstractmethod
from typing import Any

from notes_api.models.note import Note


class NoteRepository(ABC):
    """Abstract note store."""

    @abstractmethod
    async def get_many(
        self,
        page: int,
        limit: int,
        has_favorited: bool,
    ) -> list[Note]:
        """Notes matching has_favorited, most recently updated first."""

    @abstractmethod
    async def get_by_id(self, note_id: str) -> Note | None:
        """Note with the given id, or None."""

    @abstractmethod
    async def add(self, **fields: Any) -> Note:
        """Insert a note and return it with id and timestamps set."""

    @abstractmethod
    async def update(self, note_id: str, **fields: Any) -> Note | None:
        """Merge fields over an existing note, or return None if absent."""

    @abstractmethod
    async def remove(self, note_id: str) -> Note | None:
        """Delete a note and return its last state, or None if absent."""
