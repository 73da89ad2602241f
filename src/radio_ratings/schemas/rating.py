"""Rating-related Pydantic schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from radio_ratings.services.rating_store import validate_rating, validate_track_id


class RatingCreate(BaseModel):
    """Schema for submitting a vote.

    Both fields default to None so a missing value reaches the validators and
    produces the same message as an empty one.
    """

    model_config = ConfigDict(populate_by_name=True)

    track_id: str = Field(default=None, alias="trackId", validate_default=True)
    rating: int = Field(
        default=None,
        validate_default=True,
        description="1 for thumbs up, -1 for thumbs down",
    )

    @field_validator("track_id", mode="before")
    @classmethod
    def _check_track_id(cls, value: Any) -> str:
        return validate_track_id(value)

    @field_validator("rating", mode="before")
    @classmethod
    def _check_rating(cls, value: Any) -> int:
        return validate_rating(value)


class RatingAccepted(BaseModel):
    """Response for an accepted vote."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    track_id: str = Field(alias="trackId")
    rating: int


class RatingCounts(BaseModel):
    """Aggregate votes for a track."""

    model_config = ConfigDict(populate_by_name=True)

    thumbs_up: int = Field(default=0, alias="thumbsUp")
    thumbs_down: int = Field(default=0, alias="thumbsDown")


class UserRating(BaseModel):
    """The caller's own vote on a track, if any."""

    rating: Literal[1, -1] | None = None
