"""Tests for application settings."""

from __future__ import annotations

import pytest

from radio_ratings.core.settings import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("DATABASE_URL", "FORWARDED_FOR_HEADER", "FALLBACK_CLIENT_ADDRESS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.effective_database_url == "sqlite:///./database.db"
    assert settings.uses_postgres is False
    assert settings.forwarded_for_header == "x-forwarded-for"
    assert settings.fallback_client_address == "0.0.0.0"


@pytest.mark.parametrize(
    "url",
    [
        "postgres://radio:secret@db:5432/ratings",
        "postgresql://radio:secret@db:5432/ratings",
        "postgresql+psycopg://radio:secret@db:5432/ratings",
    ],
)
def test_postgres_urls_use_psycopg(url: str) -> None:
    settings = Settings(_env_file=None, DATABASE_URL=url)

    assert settings.effective_database_url == "postgresql+psycopg://radio:secret@db:5432/ratings"
    assert settings.uses_postgres is True


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/other.db")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", '["https://radio.example"]')

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///tmp/other.db"
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["https://radio.example"]
