"""Tests for request schema validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from radio_ratings.schemas.rating import RatingCounts, RatingCreate


def test_accepts_valid_vote() -> None:
    vote = RatingCreate.model_validate({"trackId": "abc", "rating": -1})
    assert vote.track_id == "abc"
    assert vote.rating == -1


@pytest.mark.parametrize("rating", [0, 2, "1", "-1", 1.5, -1.0, False, None, [1]])
def test_rating_must_be_exact_integer(rating) -> None:
    with pytest.raises(PydanticValidationError, match="Rating must be 1 or -1"):
        RatingCreate.model_validate({"trackId": "abc", "rating": rating})


def test_missing_fields_report_domain_messages() -> None:
    with pytest.raises(PydanticValidationError) as exc_info:
        RatingCreate.model_validate({})

    messages = [str(error["ctx"]["error"]) for error in exc_info.value.errors()]
    assert messages == ["Track ID required", "Rating must be 1 or -1"]


def test_counts_serialize_with_player_keys() -> None:
    counts = RatingCounts(thumbs_up=3, thumbs_down=1)
    assert counts.model_dump(by_alias=True) == {"thumbsUp": 3, "thumbsDown": 1}
