from datetime import UTC, datetime

from sqlalchemy import DateTime, text
from sqlmodel import Field, SQLModel


class IntIdMixin(SQLModel):
    """Mixin providing an autoincrement integer primary key."""

    id: int | None = Field(default=None, primary_key=True)


class TimestampMixin(SQLModel):
    """Mixin providing created_at and updated_at timestamps.

    Note: The database columns are TIMESTAMP WITH TIME ZONE.
    SQLModel Field uses sa_type to override the default DateTime mapping.
    """

    created_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
