"""Shared FastAPI dependencies.

Long-lived resources are created by the application lifespan and kept on
``app.state``; handlers receive them through these providers so tests can
swap them with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from radio_ratings.core.settings import Settings
from radio_ratings.services.identity import client_user_id
from radio_ratings.services.metadata import MetadataClient
from radio_ratings.services.rating_store import RatingStore


def get_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""
    return request.app.state.settings


def get_rating_store(request: Request) -> RatingStore:
    """Return the application's rating store."""
    return request.app.state.rating_store


def get_metadata_client(request: Request) -> MetadataClient:
    """Return the application's now-playing metadata client."""
    return request.app.state.metadata_client


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_client_user_id(request: Request, settings: SettingsDep) -> str:
    """Derive the anonymous listener id for the current request."""
    return client_user_id(request, settings)


RatingStoreDep = Annotated[RatingStore, Depends(get_rating_store)]
MetadataClientDep = Annotated[MetadataClient, Depends(get_metadata_client)]
ClientUserIdDep = Annotated[str, Depends(get_client_user_id)]
