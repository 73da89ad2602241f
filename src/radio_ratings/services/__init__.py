"""Service layer for identity, ratings and now-playing metadata."""

from .identity import client_user_id, derive_user_id, resolve_client_address
from .metadata import MetadataClient, NowPlaying, PreviousTrack, derive_track_id
from .rating_store import (
    PostgresRatingStore,
    RatingCounts,
    RatingStore,
    SqliteRatingStore,
    VoteReceipt,
    create_rating_store,
)

__all__ = [
    "client_user_id", "derive_user_id", "resolve_client_address",
    "MetadataClient", "NowPlaying", "PreviousTrack", "derive_track_id",
    "RatingStore", "SqliteRatingStore", "PostgresRatingStore",
    "RatingCounts", "VoteReceipt", "create_rating_store",
]
