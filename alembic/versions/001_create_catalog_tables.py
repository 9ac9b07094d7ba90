"""Create genres and movies tables

Revision ID: 001
Revises: None
Create Date: 2024-12-01 00:00:00.000000+00:00

What:  Creates the `genres` and `movies` tables.
How:   movies.genres is a comma-joined TEXT list of genre names; there is no
       foreign key between the tables (genres are referenced by name).

Rollback: downgrade() drops both tables (destructive, all data is lost).
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
        "genres",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Genre name, referenced verbatim by movies.genres",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "movies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("release_date", sa.Date(), nullable=False),
        sa.Column(
            "genres",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Comma-joined genre names, in the order the client gave them",
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("movies")
    op.drop_table("genres")
