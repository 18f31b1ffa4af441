"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
"""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from notes_api.models.note import Note
from notes_api.repositories.base import NoteRepository


def make_note(**overrides: Any) -> Note:
    """Build a transient Note with sensible defaults."""
    timestamp = datetime(2026, 1, 15, 12, 30, 0, 123456)
    fields = {
        "id": str(uuid4()),
        "title": "Groceries",
        "description": "Milk, eggs and bread.",
        "has_favorited": False,
        "color": None,
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    fields.update(overrides)
    return Note(**fields)


@pytest.fixture
def note_factory():
    """Provide the make_note helper."""
    return make_note


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """AsyncSession stand-in; add() is the only synchronous method the store calls."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """Result of session.execute() that finds nothing until configured."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    result.scalars.return_value.all.return_value = []
    return result


@pytest.fixture
def mock_repository() -> AsyncMock:
    """Mock note store implementing the NoteRepository interface."""
    return AsyncMock(spec=NoteRepository)


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()
