"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table: id, title, content, created_at.
How:   Portable column types (Uuid, DateTime with timezone) so the same
       migration applies to PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (all notes are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Opaque note identifier",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Note title",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Note body text",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Listing is always newest first
    op.create_index(
        "idx_notes_created_at",
        "notes",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
