"""Configuration settings behaviour tests."""

from __future__ import annotations

import pytest

from app.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.app_name == "MoodPicks"
    assert settings.sample_size == 3
    assert settings.database_url.startswith("sqlite+aiosqlite://")
    assert settings.log_level == "INFO"


def test_postgres_urls_use_async_driver() -> None:
    """Bare Postgres URLs should be pointed at asyncpg."""

    heroku_style = Settings(_env_file=None, DATABASE_URL="postgres://u:p@db:5432/movies")
    libpq_style = Settings(_env_file=None, DATABASE_URL="postgresql://u:p@db/movies")
    explicit = Settings(_env_file=None, DATABASE_URL="postgresql+psycopg://u:p@db/movies")

    assert heroku_style.database_url == "postgresql+asyncpg://u:p@db:5432/movies"
    assert libpq_style.database_url == "postgresql+asyncpg://u:p@db/movies"
    assert explicit.database_url == "postgresql+psycopg://u:p@db/movies"


def test_sample_size_override() -> None:
    settings = Settings(_env_file=None, SAMPLE_SIZE=5)

    assert settings.sample_size == 5


def test_log_level_is_case_insensitive() -> None:
    settings = Settings(_env_file=None, LOG_LEVEL="debug")

    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"SAMPLE_SIZE": 0},
        {"DB_POOL_SIZE": 0},
        {"DB_MAX_OVERFLOW": -1},
        {"DB_POOL_TIMEOUT": 0},
        {"ENVIRONMENT": "staging"},
    ],
)
def test_invalid_values_raise(overrides) -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, **overrides)


def test_environment_variables_are_read(monkeypatch) -> None:
    monkeypatch.setenv("SAMPLE_SIZE", "4")
    monkeypatch.setenv("DB_POOL_SIZE", "12")

    settings = Settings(_env_file=None)

    assert settings.sample_size == 4
    assert settings.db_pool_size == 12
