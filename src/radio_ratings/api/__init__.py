"""HTTP API for the radio ratings service."""

from .endpoints import now_playing_router, ratings_router, system_router
from .errors import register_exception_handlers

__all__ = [
    "ratings_router",
    "now_playing_router",
    "system_router",
    "register_exception_handlers",
]
