"""
Note Model.

Database model for the note resource.
"""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.models.base import Base, TimestampMixin, UUIDMixin


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    A note without a color is simply uncolored; list queries filter
    on has_favorited only.
    """

    __tablename__ = "notes"
    __table_args__ = (
        Index("ix_notes_has_favorited_updated_at", "has_favorited", "updated_at"),
    )

    title: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
    )
    has_favorited: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
    )
    color: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
