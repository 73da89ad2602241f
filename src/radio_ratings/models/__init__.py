"""SQLAlchemy models for the radio ratings service."""

from .rating import TrackRating

__all__ = ["TrackRating"]
