"""Persistence for per-track listener votes.

One ``RatingStore`` is created at startup around the application's engine and
shared by every request. Each operation opens its own short-lived session, so
the store itself holds no per-request state. Concurrent votes from the same
listener on the same track are serialized by the database's native
``INSERT ... ON CONFLICT DO UPDATE``; the last commit wins.

The two variants differ only in which dialect ``insert`` construct they build
the upsert from. Parameter binding is left to SQLAlchemy.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, ClassVar, Final

from sqlalchemy import func, select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from radio_ratings.core.exceptions import StoreError, ValidationError
from radio_ratings.db.session import Base
from radio_ratings.db.time import utcnow
from radio_ratings.models import TrackRating

logger = logging.getLogger(__name__)

THUMBS_UP: Final[int] = 1
THUMBS_DOWN: Final[int] = -1
VALID_RATINGS: Final[frozenset[int]] = frozenset({THUMBS_UP, THUMBS_DOWN})

TRACK_ID_REQUIRED: Final[str] = "Track ID required"
INVALID_RATING: Final[str] = "Rating must be 1 or -1"


def validate_track_id(track_id: Any) -> str:
    """Return ``track_id`` if it is a non-empty string, else raise ValidationError."""
    if not isinstance(track_id, str) or not track_id:
        raise ValidationError(TRACK_ID_REQUIRED)
    return track_id


def validate_rating(rating: Any) -> int:
    """Return ``rating`` if it is exactly the integer 1 or -1.

    Booleans, floats and numeric strings are rejected even when they compare
    equal to 1 or -1.
    """
    if isinstance(rating, bool) or not isinstance(rating, int) or rating not in VALID_RATINGS:
        raise ValidationError(INVALID_RATING)
    return rating


@dataclass(frozen=True)
class VoteReceipt:
    """Echo of an accepted vote. Does not say whether it was new or changed."""

    track_id: str
    rating: int


@dataclass(frozen=True)
class RatingCounts:
    """Aggregate votes for one track."""

    thumbs_up: int = 0
    thumbs_down: int = 0


class RatingStore(ABC):
    """Vote storage keyed on the unique (track_id, user_id) pair."""

    dialect_name: ClassVar[str]

    def __init__(self, engine: Engine) -> None:
        if engine.dialect.name != self.dialect_name:
            raise StoreError(
                f"{type(self).__name__} requires a {self.dialect_name} engine, "
                f"got {engine.dialect.name}"
            )
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @abstractmethod
    def _insert(self) -> Any:
        """Return the dialect ``insert`` construct for the ratings table."""

    def _upsert(self, track_id: str, rating: int, user_id: str) -> Any:
        """Build the insert that overwrites rating and timestamp on a duplicate pair."""
        stmt = self._insert().values(
            track_id=track_id,
            user_id=user_id,
            rating=rating,
            created_at=utcnow(),
        )
        return stmt.on_conflict_do_update(
            index_elements=["track_id", "user_id"],
            set_={
                "rating": stmt.excluded.rating,
                "created_at": stmt.excluded.created_at,
            },
        )

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Rating store %s failed: %s", operation, exc, exc_info=True)
            raise StoreError(f"Database error during {operation}") from exc
        finally:
            session.close()

    def submit_vote(self, track_id: Any, rating: Any, user_id: str) -> VoteReceipt:
        """Record ``rating`` as the listener's current vote on ``track_id``.

        Inserts a row for a new pair and overwrites rating and timestamp for an
        existing one, in a single statement.

        Raises:
            ValidationError: if ``track_id`` is empty or ``rating`` is not 1/-1.
            StoreError: if the database rejects the write.
        """
        track_id = validate_track_id(track_id)
        rating = validate_rating(rating)

        stmt = self._upsert(track_id, rating, user_id)

        with self._session("submit_vote") as session:
            session.execute(stmt)
            session.commit()

        logger.debug("Recorded vote %+d on %s from %s", rating, track_id, user_id)
        return VoteReceipt(track_id=track_id, rating=rating)

    def get_counts(self, track_id: Any) -> RatingCounts:
        """Return thumbs-up and thumbs-down totals; unknown tracks count zero."""
        track_id = validate_track_id(track_id)
        stmt = (
            select(TrackRating.rating, func.count())
            .where(TrackRating.track_id == track_id)
            .group_by(TrackRating.rating)
        )

        with self._session("get_counts") as session:
            rows = session.execute(stmt).all()

        totals = {rating: int(count) for rating, count in rows}
        return RatingCounts(
            thumbs_up=totals.get(THUMBS_UP, 0),
            thumbs_down=totals.get(THUMBS_DOWN, 0),
        )

    def get_user_vote(self, track_id: Any, user_id: str) -> int | None:
        """Return the listener's vote on ``track_id``, or None if they have not voted."""
        track_id = validate_track_id(track_id)
        stmt = select(TrackRating.rating).where(
            TrackRating.track_id == track_id,
            TrackRating.user_id == user_id,
        )

        with self._session("get_user_vote") as session:
            return session.execute(stmt).scalar_one_or_none()

    def ping(self) -> None:
        """Round-trip a trivial query, raising StoreError if the database is down."""
        with self._session("ping") as session:
            session.execute(text("SELECT 1"))

    def create_schema(self) -> None:
        """Create the ratings table and its constraints if missing."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            logger.error("Schema creation failed: %s", exc, exc_info=True)
            raise StoreError("Database error during create_schema") from exc

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()


class SqliteRatingStore(RatingStore):
    """Rating store backed by SQLite (3.24+ for ON CONFLICT upserts)."""

    dialect_name = "sqlite"

    def _insert(self) -> sqlite.Insert:
        return sqlite.insert(TrackRating)


class PostgresRatingStore(RatingStore):
    """Rating store backed by PostgreSQL."""

    dialect_name = "postgresql"

    def _insert(self) -> postgresql.Insert:
        return postgresql.insert(TrackRating)


_STORES_BY_DIALECT: Final[dict[str, type[RatingStore]]] = {
    store.dialect_name: store for store in (SqliteRatingStore, PostgresRatingStore)
}


def create_rating_store(engine: Engine) -> RatingStore:
    """Return the store variant matching the engine's dialect.

    Raises:
        StoreError: if the dialect has no store implementation.
    """
    store_cls = _STORES_BY_DIALECT.get(engine.dialect.name)
    if store_cls is None:
        raise StoreError(f"Unsupported database dialect: {engine.dialect.name}")
    return store_cls(engine)
