"""Create the assignments table.

Revision ID: 20261019_assignments
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

revision = "20261019_assignments"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "assignments",
        sa.Column("id", sa.Text, primary_key=True),
        # Listing columns
        sa.Column("account", sa.Text, nullable=False),
        sa.Column("assessment_name", sa.Text, nullable=False),
        sa.Column("author", sa.Text, nullable=False),
        sa.Column("status", sa.Text, nullable=False),
        # Full document
        sa.Column(
            "document",
            JSONB,
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        # Projected role question ids
        sa.Column("school_selector_id", sa.Text, nullable=True),
        sa.Column("completion_date_id", sa.Text, nullable=True),
        sa.Column("completion_time_id", sa.Text, nullable=True),
        # Timestamps
        sa.Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index("ix_assignments_account", "assignments", ["account"])
    op.create_index(
        "ix_assignments_account_created", "assignments", ["account", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_assignments_account_created", table_name="assignments")
    op.drop_index("ix_assignments_account", table_name="assignments")
    op.drop_table("assignments")
