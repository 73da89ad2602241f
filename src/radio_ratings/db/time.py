"""Timestamp helpers for persisted rows."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as a naive UTC datetime.

    Naive values keep SQLite and PostgreSQL ``TIMESTAMP`` columns comparable.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
