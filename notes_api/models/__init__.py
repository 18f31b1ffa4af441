# SQLAlchemy models
from notes_api.models.base import Base
from notes_api.models.note import Note

__all__ = ["Base", "Note"]
