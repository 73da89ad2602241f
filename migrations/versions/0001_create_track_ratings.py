"""create track ratings

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the per-listener track ratings table."""
    op.create_table(
        "track_ratings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("track_id", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(length=16), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("rating IN (1, -1)", name="ck_track_ratings_rating"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("track_id", "user_id", name="uq_track_ratings_track_user"),
    )


def downgrade() -> None:
    """Drop the track ratings table."""
    op.drop_table("track_ratings")
