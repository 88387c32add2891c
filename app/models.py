"""Pydantic models describing recommendation payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .db_models import CatalogEntry

RECOMMENDATION_ERROR = "Failed to fetch recommendations"
STATS_ERROR = "Failed to fetch stats"


class MovieRecord(BaseModel):
    """A catalog entry as returned to clients."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    type: str | None = None
    summary: str | None = None
    language: str | None = None
    genre: str | None = None
    family_safe: str | None = Field(default=None, serialization_alias="familySafe")
    platform: str | None = None
    time_category: str | None = Field(default=None, serialization_alias="timeCategory")
    poster_url: str | None = Field(default=None, serialization_alias="posterUrl")
    year: int | None = None
    mood_tags: str | None = Field(default=None, serialization_alias="moodTags")

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "MovieRecord":
        return cls(
            id=entry.id,
            name=entry.name,
            type=entry.content_type,
            summary=entry.summary,
            language=entry.language,
            genre=entry.genre,
            family_safe=entry.family_safe,
            platform=entry.platform,
            time_category=entry.time_category,
            poster_url=entry.poster_url or None,
            year=entry.year,
            mood_tags=entry.mood_tags,
        )


class RecommendationResponse(BaseModel):
    """Outcome of a recommendation request."""

    success: bool
    movies: list[MovieRecord] = Field(default_factory=list)
    count: int | None = None
    total_matches: int | None = Field(default=None, serialization_alias="totalMatches")
    error: str | None = None

    @classmethod
    def succeeded(cls, movies: list[MovieRecord], total_matches: int) -> "RecommendationResponse":
        return cls(
            success=True,
            movies=movies,
            count=len(movies),
            total_matches=total_matches,
        )

    @classmethod
    def failed(cls, message: str = RECOMMENDATION_ERROR) -> "RecommendationResponse":
        return cls(success=False, error=message, movies=[])

    def to_payload(self) -> dict[str, object]:
        """Return the wire payload, omitting fields that do not apply."""

        payload = self.model_dump(mode="json", by_alias=True)
        return {key: value for key, value in payload.items() if value is not None}


class TypeCount(BaseModel):
    type: str | None = None
    count: int


class CatalogStats(BaseModel):
    """Catalog size overview."""

    total_movies: int = Field(serialization_alias="totalMovies")
    by_type: list[TypeCount] = Field(default_factory=list, serialization_alias="byType")

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)
