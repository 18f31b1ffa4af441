# Persistence adapters
from notes_api.repositories.base import NoteRepository
from notes_api.repositories.note import SqlAlchemyNoteRepository

__all__ = ["NoteRepository", "SqlAlchemyNoteRepository"]
