"""Domain operations for cached daily summaries."""

from datetime import UTC, datetime

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from gitcal.models.daily_summary import DailySummary


class DailySummaryOperations:
    """
    Operations for AI-generated daily summaries.

    Note: This doesn't extend BaseOperations because summaries are
    addressed by their natural key (date, repository) and written with
    an upsert, never by surrogate id.
    """

    def __init__(self) -> None:
        self.model = DailySummary

    async def get_by_date_repository(
        self,
        db: AsyncSession,
        day: datetime,
        repository: str,
    ) -> DailySummary | None:
        """
        Get the cached summary for a day and repository.

        Args:
            db: Database session
            day: UTC midnight of the calendar day
            repository: Full repository name (owner/repo)

        Returns:
            DailySummary if exists, None otherwise
        """
        statement = select(DailySummary).where(
            and_(
                DailySummary.date == day,  # type: ignore[arg-type]
                DailySummary.repository == repository,  # type: ignore[arg-type]
            )
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        db: AsyncSession,
        day: datetime,
        repository: str,
        summary_text: str,
    ) -> DailySummary:
        """
        Create or replace the summary for a day and repository.

        Uses PostgreSQL's INSERT ... ON CONFLICT DO UPDATE so concurrent
        regenerations of the same key never produce a second row.

        Args:
            db: Database session
            day: UTC midnight of the calendar day
            repository: Full repository name (owner/repo)
            summary_text: AI-generated narrative

        Returns:
            The created or updated DailySummary
        """
        now = datetime.now(UTC)

        stmt = (
            insert(self.model)
            .values(
                date=day,
                repository=repository,
                summary=summary_text,
                created_at=now,
            )
            .on_conflict_do_update(
                index_elements=["date", "repository"],
                set_={
                    "summary": summary_text,
                    "created_at": now,
                },
            )
            .returning(DailySummary)
        )

        result = await db.execute(stmt, execution_options={"populate_existing": True})
        await db.flush()

        return result.scalar_one()


daily_summary_ops = DailySummaryOperations()
