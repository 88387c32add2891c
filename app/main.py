"""Entry point for the FastAPI-powered recommendation service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import Database
from .models import STATS_ERROR
from .preferences import PreferenceRequest
from .services.filter_composer import CatalogQueryError, FilterComposer
from .services.recommendation import RecommendationService

logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    database = Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
    )
    await database.create_all()

    composer = FilterComposer(
        database.session_factory, sample_size=settings.sample_size
    )
    fastapi_app.state.database = database
    fastapi_app.state.recommendation_service = RecommendationService(composer)

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await database.dispose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Mood based movie and series picks from a curated catalog",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @fastapi_app.middleware("http")
    async def disable_caching(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(NO_CACHE_HEADERS)
        return response

    register_routes(fastapi_app)
    return fastapi_app


def get_recommendation_service(app: FastAPI) -> RecommendationService:
    service = getattr(app.state, "recommendation_service", None)
    if not isinstance(service, RecommendationService):
        raise RuntimeError("Recommendation service not initialised")
    return service


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/api/recommendations")
    async def recommendations(request: Request) -> JSONResponse:
        service = get_recommendation_service(fastapi_app)
        preferences = PreferenceRequest.from_query(request.query_params)
        result = await service.recommend(preferences)
        status_code = 200 if result.success else 500
        return JSONResponse(result.to_payload(), status_code=status_code)

    @fastapi_app.get("/api/stats")
    async def stats() -> JSONResponse:
        service = get_recommendation_service(fastapi_app)
        try:
            catalog_stats = await service.stats()
        except CatalogQueryError:
            logger.exception("Failed to fetch catalog stats")
            return JSONResponse({"error": STATS_ERROR}, status_code=500)
        return JSONResponse(catalog_stats.to_payload())


app = create_app()
