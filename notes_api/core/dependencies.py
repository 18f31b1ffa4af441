"""
FastAPI Dependencies.

Explicit construction of request-scoped collaborators:
session -> repository -> service.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.core.database import get_db_session
from notes_api.repositories.base import NoteRepository
from notes_api.repositories.note import SqlAlchemyNoteRepository
from notes_api.services.note import NoteService

# Exits before the response is sent, so commit errors reach the exception handlers
DbSession = Annotated[AsyncSession, Depends(get_db_session, scope="function")]


def get_note_repository(db: DbSession) -> NoteRepository:
    """Note store bound to the request session."""
    return SqlAlchemyNoteRepository(db)


def get_note_service(
    repository: Annotated[NoteRepository, Depends(get_note_repository)],
) -> NoteService:
    """Note service wired to the request's note store."""
    return NoteService(repository)


NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]
