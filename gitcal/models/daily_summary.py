"""Daily summary model for AI-generated per-day narratives."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Text, text
from sqlmodel import Field, SQLModel

from gitcal.models.base import IntIdMixin


class DailySummary(IntIdMixin, SQLModel, table=True):
    """
    AI-generated narrative covering every commit of one repository on one day.

    Stores one summary per (date, repository) combination using an upsert
    pattern. Forced regeneration replaces the text and bumps created_at;
    rows are never deleted.

    `date` is always UTC midnight of the calendar day (see
    services.commits.dates.utc_day_bounds) so reads and writes agree.
    """

    __tablename__ = "daily_summaries"
    __table_args__ = (
        Index(
            "ix_daily_summaries_date_repository",
            "date",
            "repository",
            unique=True,
        ),
    )

    date: datetime = Field(  # type: ignore[call-overload]
        nullable=False,
        sa_type=DateTime(timezone=True),
        description="UTC midnight of the summarized day",
    )
    repository: str = Field(
        max_length=500,
        nullable=False,
        description="GitHub repo full name (owner/repo)",
    )
    summary: str = Field(sa_type=Text, nullable=False)

    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
        description="When this summary was generated or last regenerated",
    )
