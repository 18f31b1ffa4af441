"""
Notes API Endpoints.

REST endpoints for the note resource. Absent notes are turned into
404 responses here and nowhere else.
"""

import math

from fastapi import APIRouter, Query

from notes_api.core.dependencies import NoteServiceDep
from notes_api.core.exceptions import NotFoundError, ValidationError
from notes_api.core.pagination import page_offset
from notes_api.models.note import Note
from notes_api.schemas.note import NoteCreate, NoteResponse, NoteUpdate

router = APIRouter()

# Page size of the list route; not configurable by callers
LIST_PAGE_SIZE = 100

FAVORITE_TARGET = "favorite"


def parse_page(raw: str | None) -> int:
    """
    Parse the page query parameter.

    Missing or blank values mean the first page. Decimal values are
    truncated toward zero.

    Raises:
        ValidationError: If the value is not a finite number, or its
            offset at LIST_PAGE_SIZE is too large for the database
    """
    if raw is None or not raw.strip():
        return 0
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError("Invalid page argument") from exc
    if not math.isfinite(value):
        raise ValidationError("Invalid page argument")
    page = int(value)
    page_offset(page, LIST_PAGE_SIZE)
    return page


def _found(note: Note | None) -> NoteResponse:
    if note is None:
        raise NotFoundError("Not found")
    return NoteResponse.model_validate(note)


@router.get(
    "/list",
    response_model=list[NoteResponse],
    summary="List notes",
    description="List notes filtered by favorite flag, most recently updated first.",
)
async def list_notes(
    service: NoteServiceDep,
    page: str | None = Query(
        default=None,
        description="1-based page number",
    ),
    target: str | None = Query(
        default=None,
        description="'favorite' or 'unfavorite' (default)",
    ),
) -> list[NoteResponse]:
    """List one page of favorite or unfavorite notes."""
    page_number = parse_page(page)
    has_favorited = target == FAVORITE_TARGET

    notes = await service.get_many(page_number, LIST_PAGE_SIZE, has_favorited)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
)
async def get_note(note_id: str, service: NoteServiceDep) -> NoteResponse:
    """Get a note by ID."""
    return _found(await service.get_by_id(note_id))


@router.post(
    "/add",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
)
async def add_note(data: NoteCreate, service: NoteServiceDep) -> NoteResponse:
    """Create a new note."""
    note = await service.add(data)
    return NoteResponse.model_validate(note)


@router.patch(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Partially update a note. Only the fields sent are changed.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    service: NoteServiceDep,
) -> NoteResponse:
    """Update a note."""
    return _found(await service.update(note_id, data))


@router.delete(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Delete a note",
    description="Permanently delete a note and return its last state.",
)
async def delete_note(note_id: str, service: NoteServiceDep) -> NoteResponse:
    """Delete a note."""
    return _found(await service.remove(note_id))
