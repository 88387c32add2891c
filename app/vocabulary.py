"""Fixed preference vocabularies shared by the normalizer and the catalog data.

The canonical strings here must match the values written by the catalog
import, otherwise no rows will ever match.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping


ContentTypeToken = Literal["movie", "series", "any"]
LanguageToken = Literal["english", "hindi", "regional"]
EraToken = Literal["retro", "millennial", "genz"]

ANY_TOKEN = "any"


@dataclass(frozen=True)
class VocabularyTerm:
    """Maps a user facing token to the canonical value stored in the catalog."""

    token: str
    canonical: str


@dataclass(frozen=True)
class LanguageFilter:
    """Language constraint for a single token.

    ``phrase`` is matched as a case-insensitive substring. When ``phrase`` is
    ``None`` the entry must mention none of ``excluded_phrases`` instead.
    """

    token: LanguageToken
    phrase: str | None = None
    excluded_phrases: tuple[str, ...] = ()


@dataclass(frozen=True)
class EraRange:
    """Inclusive release year bounds; ``None`` leaves that side open."""

    token: EraToken
    start: int | None = None
    end: int | None = None


DURATION_TERMS: tuple[VocabularyTerm, ...] = (
    VocabularyTerm(token="quick", canonical="Something quick (20-30 mins)"),
    VocabularyTerm(token="proper", canonical="One proper watch (40–120 mins)"),
    VocabularyTerm(token="binge", canonical="Long binge session (2+ hours)"),
)

MOOD_TERMS: tuple[VocabularyTerm, ...] = (
    VocabularyTerm(token="laugh", canonical="Make me laugh"),
    VocabularyTerm(token="feel-good", canonical="Make me feel good"),
    VocabularyTerm(token="hooked", canonical="Keep me hooked"),
    VocabularyTerm(token="emotional", canonical="Emotional & dramatic"),
    VocabularyTerm(token="mind-blow", canonical="Blow my mind"),
    VocabularyTerm(token="learn", canonical="Learn something"),
    VocabularyTerm(token="dark", canonical="Ready for something dark"),
)

CONTENT_TYPE_TERMS: tuple[VocabularyTerm, ...] = (
    VocabularyTerm(token="movie", canonical="Movie"),
    VocabularyTerm(token="series", canonical="Series"),
)

LANGUAGE_FILTERS: tuple[LanguageFilter, ...] = (
    LanguageFilter(token="english", phrase="English"),
    LanguageFilter(token="hindi", phrase="Hindi"),
    LanguageFilter(token="regional", excluded_phrases=("English", "Hindi")),
)

# Retro is strictly before 2000 and Gen Z strictly after 2020.
ERA_RANGES: tuple[EraRange, ...] = (
    EraRange(token="retro", end=1999),
    EraRange(token="millennial", start=2000, end=2020),
    EraRange(token="genz", start=2021),
)


def _term_lookup(terms: tuple[VocabularyTerm, ...]) -> Mapping[str, str]:
    """Index terms by token and by canonical value, both case-folded."""

    lookup: dict[str, str] = {}
    for term in terms:
        lookup[term.token.casefold()] = term.canonical
        lookup[term.canonical.casefold()] = term.canonical
    return MappingProxyType(lookup)


DURATIONS: Mapping[str, str] = _term_lookup(DURATION_TERMS)
MOODS: Mapping[str, str] = _term_lookup(MOOD_TERMS)
CONTENT_TYPES: Mapping[str, str] = _term_lookup(CONTENT_TYPE_TERMS)
LANGUAGES: Mapping[str, LanguageFilter] = MappingProxyType(
    {entry.token: entry for entry in LANGUAGE_FILTERS}
)
ERAS: Mapping[str, EraRange] = MappingProxyType(
    {entry.token: entry for entry in ERA_RANGES}
)
