"""Pytest configuration and test helpers."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.database import Database  # noqa: E402
from app.db_models import CatalogEntry  # noqa: E402


QUICK = "Something quick (20-30 mins)"
PROPER = "One proper watch (40–120 mins)"
BINGE = "Long binge session (2+ hours)"

CATALOG_ROWS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Laugh Riot",
        "content_type": "Movie",
        "language": "English",
        "time_category": QUICK,
        "mood_tags": "Make me laugh, Make me feel good",
        "year": 2010,
        "family_safe": "Yes",
        "platform": "Netflix",
        "poster_url": "https://example.com/laugh-riot.jpg",
    },
    {
        "id": 2,
        "name": "Monsoon Shadows",
        "content_type": "Movie",
        "language": "Hindi",
        "time_category": PROPER,
        "mood_tags": "Ready for something dark, Keep me hooked",
        "year": 2018,
    },
    {
        "id": 3,
        "name": "Temple Run Chronicles",
        "content_type": "Movie",
        "language": "Tamil",
        "time_category": BINGE,
        "mood_tags": "Emotional & dramatic",
        "year": 1995,
    },
    {
        "id": 4,
        "name": "Cosmos Explained",
        "content_type": "Series",
        "language": "English, Hindi",
        "time_category": QUICK,
        "mood_tags": "Learn something, Blow my mind",
        "year": 2022,
    },
    {
        "id": 5,
        "name": "Kochi Capers",
        "content_type": "Series",
        "language": "Malayalam",
        "time_category": QUICK,
        "mood_tags": "make me LAUGH",
        "year": 2023,
    },
    {
        "id": 6,
        "name": "Night Train Noir",
        "content_type": "Movie",
        "language": "english",
        "time_category": PROPER,
        "mood_tags": "ready for something dark",
        "year": 1975,
    },
    {
        "id": 7,
        "name": "Untagged Oddity",
        "content_type": "Movie",
        "language": None,
        "time_category": PROPER,
        "mood_tags": None,
        "year": None,
    },
    {
        "id": 8,
        "name": "Kolkata Letters",
        "content_type": "Series",
        "language": "Bengali",
        "time_category": BINGE,
        "mood_tags": "Emotional & dramatic, Make me feel good",
        "year": 2005,
    },
]

DatabaseFactory = Callable[..., Awaitable[Database]]


@pytest.fixture
def make_catalog_database(tmp_path) -> DatabaseFactory:
    """Return a coroutine factory creating a seeded SQLite catalog.

    The factory must be awaited inside the test's own event loop; callers are
    responsible for disposing of the returned database.
    """

    counter = itertools.count()

    async def factory(rows: list[dict[str, Any]] | None = None) -> Database:
        path = tmp_path / f"catalog-{next(counter)}.db"
        database = Database(f"sqlite+aiosqlite:///{path}")
        await database.create_all()
        async with database.session() as session:
            for row in CATALOG_ROWS if rows is None else rows:
                session.add(CatalogEntry(**{"summary": f"About {row['name']}", **row}))
            await session.commit()
        return database

    return factory
