"""Recommendation orchestration: normalize, compose, shape."""

from __future__ import annotations

import logging

from ..models import (
    CatalogStats,
    MovieRecord,
    RecommendationResponse,
    TypeCount,
)
from ..preferences import PreferenceRequest, normalize_preferences
from .filter_composer import CatalogQueryError, FilterComposer

logger = logging.getLogger(__name__)


class RecommendationService:
    """Turns raw preferences into a shaped recommendation response."""

    def __init__(self, composer: FilterComposer):
        self._composer = composer

    @property
    def composer(self) -> FilterComposer:
        return self._composer

    async def recommend(self, request: PreferenceRequest) -> RecommendationResponse:
        """Return a random sample of catalog entries matching ``request``.

        Failures are reported as ``success=False`` with no movies; the
        underlying error is logged but never returned to the caller.
        """

        logger.info("Recommendation request: %s", request.model_dump(exclude_defaults=True))
        preferences = normalize_preferences(request)
        if preferences.is_empty:
            logger.debug("No recognised preferences; sampling the whole catalog")

        try:
            result = await self._composer.sample(preferences)
        except CatalogQueryError as exc:
            logger.exception(
                "Recommendation query failed for predicate %s params=%s",
                exc.predicate,
                exc.params,
            )
            return RecommendationResponse.failed()
        except Exception:
            logger.exception("Unexpected error while building recommendations")
            return RecommendationResponse.failed()

        movies = [MovieRecord.from_entry(entry) for entry in result.entries]
        logger.info(
            "Returning %d of %d matching entries", len(movies), result.total_matches
        )
        return RecommendationResponse.succeeded(movies, result.total_matches)

    async def stats(self) -> CatalogStats:
        """Return catalog size and per-type counts.

        Raises :class:`CatalogQueryError` when the store is unavailable.
        """

        total, by_type = await self._composer.count_by_type()
        return CatalogStats(
            total_movies=total,
            by_type=[
                TypeCount(type=content_type, count=count)
                for content_type, count in by_type
            ],
        )
