"""Track rating endpoints."""

from fastapi import APIRouter

from radio_ratings.api.dependencies import ClientUserIdDep, RatingStoreDep
from radio_ratings.core.exceptions import ValidationError
from radio_ratings.schemas.rating import RatingAccepted, RatingCounts, RatingCreate, UserRating
from radio_ratings.services.rating_store import TRACK_ID_REQUIRED

router = APIRouter(prefix="/api", tags=["ratings"])


@router.get("/ratings/{track_id}", response_model=RatingCounts)
def get_track_ratings(track_id: str, store: RatingStoreDep) -> RatingCounts:
    """Return thumbs-up and thumbs-down totals for a track."""
    counts = store.get_counts(track_id)
    return RatingCounts(thumbs_up=counts.thumbs_up, thumbs_down=counts.thumbs_down)


@router.post("/ratings", response_model=RatingAccepted)
def submit_rating(
    rating_data: RatingCreate,
    store: RatingStoreDep,
    user_id: ClientUserIdDep,
) -> RatingAccepted:
    """Record the caller's vote on a track, replacing any earlier vote.

    The response does not say whether the vote was new or changed; clients
    re-fetch the totals afterwards.
    """
    receipt = store.submit_vote(rating_data.track_id, rating_data.rating, user_id)
    return RatingAccepted(track_id=receipt.track_id, rating=receipt.rating)


@router.get("/user-rating/{track_id}", response_model=UserRating)
def get_user_rating(
    track_id: str,
    store: RatingStoreDep,
    user_id: ClientUserIdDep,
) -> UserRating:
    """Return the caller's own vote on a track, or null."""
    return UserRating(rating=store.get_user_vote(track_id, user_id))


@router.get("/ratings/", include_in_schema=False)
@router.get("/user-rating/", include_in_schema=False)
def missing_track_id() -> None:
    """Reject lookups whose track id path segment is empty."""
    raise ValidationError(TRACK_ID_REQUIRED)
