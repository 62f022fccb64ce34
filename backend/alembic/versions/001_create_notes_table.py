"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `notes` table: integer id, title, and Markdown content.
How:   id is an auto-increment integer primary key (SERIAL on PostgreSQL,
       AUTOINCREMENT on SQLite so ids are never handed out twice).

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
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Store-assigned identifier, never reused",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Note title",
        ),
        # TEXT: note bodies are never truncated
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Raw Markdown source, stored verbatim",
        ),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("notes")
