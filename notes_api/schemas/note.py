"""
Note Schemas.

Pydantic schemas for note request validation and responses.
JSON field names are camelCase (hasFavorited, createdAt, updatedAt).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, model_validator
from pydantic.alias_generators import to_camel

NOTE_FIELDS = ("title", "description", "has_favorited", "color")
NON_NULLABLE_FIELDS = ("title", "description", "has_favorited")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NoteCreate(_CamelModel):
    """Schema for creating a new note. All fields but color are required."""

    title: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Note title",
        examples=["Groceries"],
    )
    description: str = Field(
        ...,
        min_length=3,
        max_length=1000,
        description="Note body",
        examples=["Milk, eggs and bread."],
    )
    has_favorited: StrictBool = Field(
        ...,
        description="Whether the note is marked as favorite",
    )
    color: str | None = Field(
        default=None,
        min_length=2,
        max_length=50,
        description="Optional color name",
        examples=["light-blue"],
    )


class NoteUpdate(_CamelModel):
    """
    Schema for partially updating a note.

    At least one field must carry a value. Sending color as null
    clears the color; the other fields cannot be nulled.
    """

    title: str | None = Field(
        default=None,
        min_length=3,
        max_length=50,
        description="Note title",
    )
    description: str | None = Field(
        default=None,
        min_length=3,
        max_length=1000,
        description="Note body",
    )
    has_favorited: StrictBool | None = Field(
        default=None,
        description="Whether the note is marked as favorite",
    )
    color: str | None = Field(
        default=None,
        min_length=2,
        max_length=50,
        description="Color name, null to clear",
    )

    @model_validator(mode="after")
    def _require_values(self) -> "NoteUpdate":
        for name in NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")

        if all(getattr(self, name) is None for name in NOTE_FIELDS):
            raise ValueError(
                "At least one of title, description, hasFavorited or color is required"
            )
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, keyed by attribute name."""
        return self.model_dump(include=set(NOTE_FIELDS), exclude_unset=True)


class NoteResponse(_CamelModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    description: str = Field(description="Note body")
    color: str | None = Field(description="Color name, null when uncolored")
    has_favorited: bool = Field(description="Whether the note is a favorite")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
