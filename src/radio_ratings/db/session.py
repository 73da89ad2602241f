"""Database engine configuration."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine for a SQLite or PostgreSQL URL.

    SQLite connections are shared across FastAPI's worker threads, and
    in-memory databases are pinned to a single connection so every session
    sees the same data.
    """
    url = make_url(database_url)
    kwargs: dict[str, Any] = {"echo": echo}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    return create_engine(url, **kwargs)
