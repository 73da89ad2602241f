"""System and health endpoints."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter

from radio_ratings.api.dependencies import RatingStoreDep, SettingsDep
from radio_ratings.core.exceptions import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/config")
def get_public_config(settings: SettingsDep) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes connection strings; suitable for showing in a player's about box.

    Args:
        settings: Active application settings

    Returns:
        Dictionary with app name, version, database backend and metadata source
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "database": {
            "backend": "postgresql" if settings.uses_postgres else "sqlite",
        },
        "metadata": {
            "url": settings.metadata_url,
        },
    }


@router.get("/health")
def get_system_health(store: RatingStoreDep, settings: SettingsDep) -> dict[str, object]:
    """Health check including database connectivity.

    Args:
        store: Rating store to ping
        settings: Active application settings

    Returns:
        Dictionary with overall status, component health and version
    """
    try:
        store.ping()
        db_status = "healthy"
    except StoreError as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "timestamp": int(time.time()),
        "components": {
            "database": db_status,
        },
        "version": settings.app_version,
    }
