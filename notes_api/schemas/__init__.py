# Pydantic schemas package
from notes_api.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata
from notes_api.schemas.note import NoteCreate, NoteResponse, NoteUpdate

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "NoteCreate",
    "NoteResponse",
    "NoteUpdate",
    "ResponseMetadata",
]
