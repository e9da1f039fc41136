"""Planner collections table.

Revision ID: 001_planner_collections
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_planner_collections"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the key-value table holding one JSON array per collection."""
    op.create_table(
        "planner_collections",
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("payload", sa.Text(), server_default="[]", nullable=False, comment="JSON array of entities"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("name"),
    )


def downgrade() -> None:
    """Drop the collections table."""
    op.drop_table("planner_collections")
