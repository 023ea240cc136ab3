"""Commit model for synced version-control history."""

from datetime import datetime

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import DateTime, Index, Text
from sqlmodel import Field, SQLModel

from gitcal.models.base import IntIdMixin, TimestampMixin


class Commit(IntIdMixin, TimestampMixin, SQLModel, table=True):
    """
    One changeset synced from a local checkout or from GitHub.

    Lookup for re-sync is by (repository, hash) since:
    - The same hash can exist in forks synced under different names
    - Re-syncing a repository must update rows, never duplicate them

    `diff` is None until it has been fetched; `generated_summary` is None
    until an LLM summary has been generated from that diff.
    """

    __tablename__ = "commits"
    __table_args__ = (
        Index("ix_commits_repository_hash", "repository", "hash", unique=True),
        Index("ix_commits_repository_date", "repository", "date"),
    )

    hash: str = Field(max_length=64, nullable=False, description="Full commit SHA")
    author: str = Field(max_length=255, nullable=False)
    date: datetime = Field(  # type: ignore[call-overload]
        nullable=False,
        sa_type=DateTime(timezone=True),
        description="Author date as reported upstream",
    )
    message: str = Field(sa_type=Text, nullable=False, description="Subject line")
    summary: str | None = Field(
        default=None,
        sa_type=Text,
        description="Remaining lines of the commit message body",
    )
    diff: str | None = Field(default=None, sa_type=Text)
    generated_summary: str | None = Field(default=None, sa_type=Text)
    repository: str = Field(
        max_length=500,
        nullable=False,
        description="Short label (local sync) or owner/repo (GitHub sync)",
    )


class CommitRead(SQLModel):
    """Schema for reading commits (camelCase for the calendar UI)."""

    model_config = ConfigDict(  # type: ignore[assignment]
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    hash: str
    author: str
    date: datetime
    message: str
    summary: str | None
    diff: str | None
    generated_summary: str | None
    repository: str
