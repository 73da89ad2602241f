"""Error taxonomy shared by the store, services and HTTP layer."""

from __future__ import annotations


class RatingsError(RuntimeError):
    """Base exception for all service failures."""


class ValidationError(RatingsError, ValueError):
    """Raised when client input is missing or malformed.

    Always caused by the caller; mapped to HTTP 400 and never retried.
    Subclasses ``ValueError`` so Pydantic validators can raise it directly.
    """


class StoreError(RatingsError):
    """Raised when the backing database fails.

    Mapped to HTTP 500. The underlying cause is logged but not exposed.
    """


class MetadataError(RatingsError):
    """Raised when the now-playing metadata source cannot be read."""
