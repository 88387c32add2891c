"""Compose preference filters into a single catalog query."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from sqlalchemy import ColumnElement, and_, func, not_, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..db_models import CatalogEntry
from ..preferences import NormalizedPreferences
from ..vocabulary import EraRange, LanguageFilter

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 3

Clause = ColumnElement[bool]


class CatalogQueryError(RuntimeError):
    """Raised when the catalog store cannot execute a query."""

    def __init__(
        self,
        message: str,
        *,
        predicate: str | None = None,
        params: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.predicate = predicate
        self.params = params or {}


@dataclass
class FilterResult:
    """Random sample of matching entries plus the total match count."""

    entries: list[CatalogEntry] = field(default_factory=list)
    total_matches: int = 0

    @property
    def count(self) -> int:
        return len(self.entries)


def any_of(clauses: Sequence[Clause]) -> Clause | None:
    """OR the clauses of one filter group; an empty group is no constraint."""

    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return or_(*clauses)


def all_of(fragments: Sequence[Clause | None]) -> Clause:
    """AND every present fragment; with none present everything matches."""

    present = [fragment for fragment in fragments if fragment is not None]
    if not present:
        return true()
    return and_(*present)


def duration_clause(preferences: NormalizedPreferences) -> Clause | None:
    if preferences.duration is None:
        return None
    return CatalogEntry.time_category == preferences.duration


def mood_clause(preferences: NormalizedPreferences) -> Clause | None:
    return any_of(
        [
            CatalogEntry.mood_tags.icontains(mood, autoescape=True)
            for mood in preferences.moods
        ]
    )


def content_type_clause(preferences: NormalizedPreferences) -> Clause | None:
    if preferences.content_type is None:
        return None
    return CatalogEntry.content_type == preferences.content_type


def _language_term(entry: LanguageFilter) -> Clause:
    if entry.phrase is not None:
        return CatalogEntry.language.icontains(entry.phrase, autoescape=True)
    # A missing language is unknown, not regional.
    return and_(
        CatalogEntry.language.is_not(None),
        *(
            not_(CatalogEntry.language.icontains(phrase, autoescape=True))
            for phrase in entry.excluded_phrases
        ),
    )


def language_clause(preferences: NormalizedPreferences) -> Clause | None:
    return any_of([_language_term(entry) for entry in preferences.languages])


def _era_term(era: EraRange) -> Clause:
    bounds: list[Clause] = []
    if era.start is not None:
        bounds.append(CatalogEntry.year >= era.start)
    if era.end is not None:
        bounds.append(CatalogEntry.year <= era.end)
    if not bounds:
        return CatalogEntry.year.is_not(None)
    return and_(*bounds)


def era_clause(preferences: NormalizedPreferences) -> Clause | None:
    return any_of([_era_term(era) for era in preferences.eras])


def exclusion_clause(preferences: NormalizedPreferences) -> Clause | None:
    if not preferences.exclude_ids:
        return None
    return CatalogEntry.id.not_in(preferences.exclude_ids)


FILTER_GROUPS: tuple[Callable[[NormalizedPreferences], Clause | None], ...] = (
    duration_clause,
    mood_clause,
    content_type_clause,
    language_clause,
    exclusion_clause,
    era_clause,
)


def build_predicate(preferences: NormalizedPreferences) -> Clause:
    """Return the full predicate for ``preferences``."""

    return all_of([group(preferences) for group in FILTER_GROUPS])


def describe_predicate(predicate: Clause) -> str:
    """Render a predicate for log output without inlining bound values."""

    try:
        return str(predicate.compile())
    except SQLAlchemyError:  # pragma: no cover - rendering is best effort
        return repr(predicate)


def predicate_params(predicate: Clause) -> dict[str, Any]:
    """Return the bound values of a predicate for log output."""

    try:
        return dict(predicate.compile().params)
    except SQLAlchemyError:  # pragma: no cover - rendering is best effort
        return {}


class FilterComposer:
    """Executes composed predicates against the catalog store."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        rng: random.Random | None = None,
    ):
        if sample_size < 1:
            raise ValueError("sample_size must be at least 1")
        self._session_factory = session_factory
        self._sample_size = sample_size
        self._rng = rng or random.SystemRandom()

    @property
    def sample_size(self) -> int:
        return self._sample_size

    async def sample(self, preferences: NormalizedPreferences) -> FilterResult:
        """Return a uniformly random sample of entries matching ``preferences``.

        Every matching id is loaded and shuffled before truncation so each
        match is equally likely to be picked.
        """

        predicate = build_predicate(preferences)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Catalog predicate: %s params=%s",
                describe_predicate(predicate),
                predicate_params(predicate),
            )

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(CatalogEntry.id).where(predicate)
                )
                matching_ids = list(result.scalars().all())
                self._rng.shuffle(matching_ids)
                chosen = matching_ids[: self._sample_size]
                entries: list[CatalogEntry] = []
                if chosen:
                    rows = await session.execute(
                        select(CatalogEntry).where(CatalogEntry.id.in_(chosen))
                    )
                    by_id = {entry.id: entry for entry in rows.scalars().all()}
                    entries = [by_id[entry_id] for entry_id in chosen if entry_id in by_id]
        except (SQLAlchemyError, OSError) as exc:
            raise CatalogQueryError(
                "Catalog query failed",
                predicate=describe_predicate(predicate),
                params=predicate_params(predicate),
            ) from exc

        return FilterResult(entries=entries, total_matches=len(matching_ids))

    async def count_by_type(self) -> tuple[int, list[tuple[str | None, int]]]:
        """Return the catalog size and the number of entries per content type."""

        try:
            async with self._session_factory() as session:
                total = await session.scalar(
                    select(func.count()).select_from(CatalogEntry)
                )
                rows = await session.execute(
                    select(CatalogEntry.content_type, func.count())
                    .group_by(CatalogEntry.content_type)
                    .order_by(CatalogEntry.content_type)
                )
                by_type = [(content_type, int(count)) for content_type, count in rows.all()]
        except (SQLAlchemyError, OSError) as exc:
            raise CatalogQueryError("Catalog stats query failed") from exc
        return int(total or 0), by_type
