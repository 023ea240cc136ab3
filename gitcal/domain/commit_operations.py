"""Domain operations for synced commits."""

from datetime import UTC, datetime

from sqlalchemy import and_, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from gitcal.domain.base_operations import BaseOperations
from gitcal.models.commit import Commit

# Columns written on insert; id, generated_summary and timestamps are managed here
_UPSERT_FIELDS = ("hash", "author", "date", "message", "summary", "diff", "repository")


class CommitOperations(BaseOperations[Commit]):
    """
    Operations for commit rows.

    Re-syncing a repository is an upsert keyed on (repository, hash):
    metadata is refreshed, an already fetched diff is never replaced by a
    missing one, and generated summaries are left untouched.
    """

    def __init__(self) -> None:
        super().__init__(Commit)

    async def bulk_upsert(
        self,
        db: AsyncSession,
        commits: list[Commit],
    ) -> list[Commit]:
        """
        Insert or update commits by (repository, hash).

        Uses PostgreSQL's INSERT ... ON CONFLICT DO UPDATE for atomicity.

        Args:
            db: Database session
            commits: Unsaved Commit objects (id is ignored)

        Returns:
            Persisted rows in the same order as the input, duplicates collapsed
            to their first occurrence.
        """
        if not commits:
            return []

        now = datetime.now(UTC)
        rows: dict[tuple[str, str], dict] = {}
        for commit in commits:
            key = (commit.repository, commit.hash)
            if key in rows:
                continue
            row = {field: getattr(commit, field) for field in _UPSERT_FIELDS}
            row["created_at"] = now
            row["updated_at"] = now
            rows[key] = row

        stmt = insert(self.model).values(list(rows.values()))
        stmt = stmt.on_conflict_do_update(
            index_elements=["repository", "hash"],
            set_={
                "author": stmt.excluded.author,
                "date": stmt.excluded.date,
                "message": stmt.excluded.message,
                "summary": stmt.excluded.summary,
                "diff": func.coalesce(stmt.excluded.diff, Commit.diff),
                "updated_at": now,
            },
        ).returning(Commit)

        result = await db.execute(stmt, execution_options={"populate_existing": True})
        persisted = {(c.repository, c.hash): c for c in result.scalars().all()}
        await db.flush()

        return [persisted[key] for key in rows if key in persisted]

    async def get_in_range(
        self,
        db: AsyncSession,
        repositories: list[str],
        start: datetime,
        end: datetime,
    ) -> list[Commit]:
        """
        Get commits of the given repository names dated within [start, end].

        Args:
            db: Database session
            repositories: Accepted values of Commit.repository
            start: Inclusive lower bound
            end: Inclusive upper bound

        Returns:
            Commits ordered oldest first
        """
        statement = (
            select(Commit)
            .where(
                and_(
                    Commit.repository.in_(repositories),  # type: ignore[attr-defined]
                    Commit.date >= start,  # type: ignore[operator]
                    Commit.date <= end,  # type: ignore[operator]
                )
            )
            .order_by(Commit.date.asc())  # type: ignore[attr-defined]
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def set_generated_summary(
        self,
        db: AsyncSession,
        commit: Commit,
        summary_text: str,
    ) -> Commit:
        """Store an LLM summary on a commit."""
        return await self.update(
            db,
            commit,
            {"generated_summary": summary_text, "updated_at": datetime.now(UTC)},
        )


commit_ops = CommitOperations()
