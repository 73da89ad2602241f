# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from radio_ratings.core.settings import Settings
from radio_ratings.db.session import create_db_engine
from radio_ratings.main import create_app
from radio_ratings.services.identity import derive_user_id
from radio_ratings.services.metadata import MetadataClient
from radio_ratings.services.rating_store import RatingStore, create_rating_store

TEST_DB_URL = "sqlite://"
TEST_METADATA_URL = "http://metadata.test/metadatav2.json"


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_db_engine(TEST_DB_URL)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def rating_store(engine: Engine) -> RatingStore:
    """Return a SQLite store over a fresh in-memory database."""
    store = create_rating_store(engine)
    store.create_schema()
    return store


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    """Settings pointing at in-memory storage and a fake metadata source."""
    return Settings(
        _env_file=None,
        DATABASE_URL=TEST_DB_URL,
        AUTO_CREATE_SCHEMA=False,
        METADATA_URL=TEST_METADATA_URL,
        STATIC_DIR=str(tmp_path / "no-static"),
    )


@pytest.fixture()
def metadata_payload() -> dict[str, Any]:
    """Return a station metadata document as the upstream serves it."""
    return {
        "title": "Blue Monday",
        "artist": "New Order",
        "album": "Power, Corruption & Lies",
        "prev_title_1": "Ceremony",
        "prev_artist_1": "New Order",
        "prev_title_2": "Atmosphere",
        "prev_artist_2": "Joy Division",
        "prev_title_3": "Orphaned Title",
        "prev_artist_3": "",
    }


@pytest.fixture()
def metadata_client(metadata_payload: dict[str, Any]) -> MetadataClient:
    """Return a metadata client answering from ``metadata_payload``."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=metadata_payload)

    return MetadataClient(TEST_METADATA_URL, transport=httpx.MockTransport(handler))


@pytest.fixture()
def app(
    test_settings: Settings,
    rating_store: RatingStore,
    metadata_client: MetadataClient,
) -> FastAPI:
    return create_app(
        test_settings,
        rating_store=rating_store,
        metadata_client=metadata_client,
    )


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def listener_id() -> str:
    """Listener id for requests forwarded from 1.2.3.4."""
    return derive_user_id("1.2.3.4")
