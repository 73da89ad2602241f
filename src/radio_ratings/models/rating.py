"""Per-listener thumbs-up/thumbs-down votes on tracks."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from radio_ratings.db.session import Base
from radio_ratings.db.time import utcnow

USER_ID_LENGTH = 16


class TrackRating(Base):
    """Latest vote of one anonymous listener on one track.

    Later votes from the same listener overwrite the row in place.
    """

    __tablename__ = "track_ratings"
    __table_args__ = (
        CheckConstraint("rating IN (1, -1)", name="ck_track_ratings_rating"),
        UniqueConstraint("track_id", "user_id", name="uq_track_ratings_track_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Opaque identifier derived by the player from title and artist.
    track_id: Mapped[str] = mapped_column(Text, nullable=False)

    # Truncated SHA-256 of the listener's apparent address.
    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)

    # 1 = thumbs up, -1 = thumbs down.
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
