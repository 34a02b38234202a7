"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

Creates the `notes` table backing the notes CRUD endpoints.
Rollback: downgrade() drops the table (all notes are lost).
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
            comment="Unique note identifier",
        ),
        sa.Column(
            "title",
            sa.String(255),
            nullable=False,
            comment="Note title",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Note body",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "idx_notes_created_at",
        "notes",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_notes_created_at", table_name="notes")
    op.drop_table("notes")
