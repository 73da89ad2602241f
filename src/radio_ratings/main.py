"""Main entry point for the radio ratings application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from radio_ratings.api import (
    now_playing_router,
    ratings_router,
    register_exception_handlers,
    system_router,
)
from radio_ratings.core.logging import configure_logging, log_requests
from radio_ratings.core.settings import Settings, settings
from radio_ratings.db.session import create_db_engine
from radio_ratings.services.metadata import MetadataClient
from radio_ratings.services.rating_store import RatingStore, create_rating_store

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Settings | None = None,
    *,
    rating_store: RatingStore | None = None,
    metadata_client: MetadataClient | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    The rating store and metadata client are opened when the app starts and
    closed when it stops. Instances passed in by the caller are used as-is and
    left open on shutdown.
    """
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = rating_store
        if store is None:
            engine = create_db_engine(
                app_settings.effective_database_url,
                echo=app_settings.sql_debug,
            )
            store = create_rating_store(engine)
        if app_settings.auto_create_schema:
            store.create_schema()

        client = metadata_client or MetadataClient(
            app_settings.metadata_url,
            timeout=app_settings.metadata_timeout_seconds,
        )

        app.state.rating_store = store
        app.state.metadata_client = client
        logger.info(
            "%s %s started with %s store",
            app_settings.app_name,
            app_settings.app_version,
            store.dialect_name,
        )
        try:
            yield
        finally:
            if metadata_client is None:
                await client.close()
            if rating_store is None:
                store.close()
            logger.info("%s stopped", app_settings.app_name)

    app = FastAPI(
        title=app_settings.app_name,
        description="Now-playing metadata and listener ratings for an internet radio stream",
        version=app_settings.app_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
        return await log_requests(request, call_next)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=app_settings.cors_allow_credentials,
        allow_methods=app_settings.cors_allow_methods,
        allow_headers=app_settings.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app)

    app.include_router(ratings_router)
    app.include_router(now_playing_router)
    app.include_router(system_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    # Mounted last: a "/" mount would otherwise shadow the API routes.
    static_dir = Path(app_settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info("Static directory %s not found; player assets not served", static_dir)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "radio_ratings.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
