"""
Sample Data Seeding.

Fills the notes table with random notes for local development.
"""

import random

from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.core.logging import get_logger
from notes_api.repositories.note import SqlAlchemyNoteRepository

logger = get_logger(__name__)

COLORS = (
    "light-gray",
    "light-blue",
    "beige",
    "mint-green",
    "sky-blue",
    "dove-gray",
    "light-green",
    "light-purple",
    "light-red",
    "light-orange",
    "light-peach",
    "light-yellow",
)

_TITLE_WORDS = (
    "Weekly", "Project", "Grocery", "Reading", "Travel", "Meeting",
    "Workout", "Budget", "Garden", "Recipe", "Ideas", "Errands",
)
_TITLE_NOUNS = ("plan", "list", "notes", "checklist", "reminders", "draft")
_SENTENCES = (
    "Remember to follow up on the open items before Friday.",
    "Pick up fresh vegetables and a loaf of bread on the way home.",
    "The second chapter needs a closer read before the discussion.",
    "Book the train tickets early to get the cheaper fares.",
    "Agenda covers the roadmap, hiring and the quarterly review.",
    "Three sets of squats, push-ups and a short run afterwards.",
    "Move the subscription costs into the monthly overview.",
    "Water the tomatoes twice a week while the weather stays hot.",
    "Double the garlic and let the sauce simmer a little longer.",
    "Sketch out a small tool that tidies the downloads folder.",
)


def random_note_fields(rng: random.Random) -> dict:
    """Build the fields of one random note."""
    title = f"{rng.choice(_TITLE_WORDS)} {rng.choice(_TITLE_NOUNS)}"
    description = " ".join(rng.sample(_SENTENCES, k=rng.randint(2, 5)))
    return {
        "title": title,
        "description": description,
        "has_favorited": rng.random() < 0.5,
        "color": rng.choice(COLORS) if rng.random() < 0.5 else None,
    }


async def seed_notes(
    session: AsyncSession,
    count: int = 30,
    seed: int | None = None,
) -> int:
    """
    Insert random notes through the note store.

    Args:
        session: Session to write with; the caller commits
        count: Number of notes to create
        seed: Optional random seed for reproducible data

    Returns:
        Number of notes created
    """
    rng = random.Random(seed)
    repo = SqlAlchemyNoteRepository(session)

    for _ in range(count):
        await repo.add(**random_note_fields(rng))

    logger.info("Seeded notes", extra={"count": count})
    return count
