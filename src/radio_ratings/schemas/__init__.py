"""Pydantic request and response schemas."""

from .rating import RatingAccepted, RatingCounts, RatingCreate, UserRating

__all__ = ["RatingAccepted", "RatingCounts", "RatingCreate", "UserRating"]
