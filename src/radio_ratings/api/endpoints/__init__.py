"""API endpoint modules."""

from .now_playing import router as now_playing_router
from .ratings import router as ratings_router
from .system import router as system_router

__all__ = [
    "ratings_router",
    "now_playing_router",
    "system_router",
]
