"""create_commits_and_daily_summaries

Revision ID: b7e4c2a91f3d
Revises:
Create Date: 2026-10-19 10:12:41.503218

Creates the commit store and the daily summary cache. Both tables are keyed
for upserts: commits on (repository, hash), summaries on (date, repository).
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "b7e4c2a91f3d"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "commits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("hash", sa.String(length=64), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("diff", sa.Text(), nullable=True),
        sa.Column("generated_summary", sa.Text(), nullable=True),
        sa.Column("repository", sa.String(length=500), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_commits_repository_hash",
        "commits",
        ["repository", "hash"],
        unique=True,
    )
    op.create_index(
        "ix_commits_repository_date",
        "commits",
        ["repository", "date"],
        unique=False,
    )

    op.create_table(
        "daily_summaries",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("repository", sa.String(length=500), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_daily_summaries_date_repository",
        "daily_summaries",
        ["date", "repository"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index("ix_daily_summaries_date_repository", table_name="daily_summaries")
    op.drop_table("daily_summaries")
    op.drop_index("ix_commits_repository_date", table_name="commits")
    op.drop_index("ix_commits_repository_hash", table_name="commits")
    op.drop_table("commits")
