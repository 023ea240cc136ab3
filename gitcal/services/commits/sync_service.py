"""
Commit sync and summary orchestration.

Coordinates the git reader, the GitHub client, the language model and the
two stores:
1. Sync commits (local checkout or GitHub) into the commit store
2. Summarize a single commit from its stored diff
3. Summarize a whole day of commits, cached per (day, repository)

The service holds no state between requests; everything persistent lives in
the commit and daily summary tables.
"""

import logging
import re
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from gitcal.config import settings
from gitcal.core.exceptions import NotFoundError, PreconditionError, ServiceUnavailableError
from gitcal.core.locks import KeyedLock
from gitcal.domain.commit_operations import CommitOperations, commit_ops
from gitcal.domain.daily_summary_operations import DailySummaryOperations, daily_summary_ops
from gitcal.models.commit import Commit
from gitcal.services.commits.dates import parse_calendar_date, utc_day_bounds
from gitcal.services.commits.metrics import compute_daily_metrics
from gitcal.services.commits.prompts import (
    build_commit_summary_prompt,
    build_daily_summary_prompt,
)
from gitcal.services.git import GitReader
from gitcal.services.github import GitHubService
from gitcal.services.llm import (
    COMMIT_SUMMARY_FALLBACK,
    DAILY_SUMMARY_FALLBACK,
    BaseLanguageModelClient,
    extract_text,
)

logger = logging.getLogger(__name__)

LOCAL_REPOSITORY_FALLBACK = "local"

# Serializes daily summary generation per (day, repository) within this process
_daily_summary_locks = KeyedLock()


def repository_label(repo_path: str) -> str:
    """Last non-empty segment of a filesystem path, used as the local repository name."""
    segments = [s for s in re.split(r"[\\/]", repo_path) if s]
    return segments[-1] if segments else LOCAL_REPOSITORY_FALLBACK


def repository_aliases(repo_full_name: str) -> list[str]:
    """
    Names under which a repository's commits may have been stored.

    GitHub sync stores "owner/repo"; local sync stores the checkout's folder
    name, which is usually the bare repo name.
    """
    aliases = [repo_full_name]
    short_name = repo_full_name.rsplit("/", 1)[-1]
    if short_name and short_name != repo_full_name:
        aliases.append(short_name)
    return aliases


def no_commits_message(date: str, repo_full_name: str) -> str:
    return f"No commits found for {date} in repository {repo_full_name}"


class CommitSyncService:
    """Orchestrates commit sync and LLM summaries for one request."""

    def __init__(
        self,
        db: AsyncSession,
        llm: BaseLanguageModelClient | None,
        git_reader: GitReader | None = None,
        commits: CommitOperations = commit_ops,
        summaries: DailySummaryOperations = daily_summary_ops,
        locks: KeyedLock | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            db: Request-scoped database session
            llm: Language model client used for both summary kinds; None when no
                provider is configured (sync and cached reads still work)
            git_reader: Local git access (defaults to the system git)
            commits: Commit store
            summaries: Daily summary store
            locks: Lock registry for daily summary generation (defaults to the
                process-wide registry)
        """
        self.db = db
        self.llm = llm
        self.git = git_reader or GitReader()
        self.commits = commits
        self.summaries = summaries
        self.locks = locks if locks is not None else _daily_summary_locks

    def _require_llm(self) -> BaseLanguageModelClient:
        if self.llm is None:
            raise ServiceUnavailableError("Language model provider is not configured")
        return self.llm

    # ─────────────────────────────────────────────────────────────
    # Sync
    # ─────────────────────────────────────────────────────────────

    async def sync_commits(self, repo_path: str) -> list[Commit]:
        """
        Read recent commits from a local checkout and persist them with diffs.

        Diffs are read one commit at a time. A failing `git show` aborts the
        whole sync before anything is written.

        Args:
            repo_path: Path to a local checkout

        Returns:
            Persisted commits, newest first

        Raises:
            ProcessError: If any git command fails
        """
        label = repository_label(repo_path)
        commits = await self.git.read_log(repo_path, max_count=settings.git_log_max_count)

        for commit in commits:
            commit.repository = label
            commit.diff = await self.git.read_diff(repo_path, commit.hash)

        saved = await self.commits.bulk_upsert(self.db, commits)
        logger.info(f"Synced {len(saved)} local commits for {label} from {repo_path}")
        return saved

    async def sync_github_commits(
        self,
        github: GitHubService,
        repo_full_name: str,
    ) -> list[Commit]:
        """
        Fetch a GitHub repository's recent commits and persist them.

        Commits whose diff could not be fetched are stored without one (or keep
        a previously stored diff).

        Returns:
            Persisted commits in upstream order (newest first)
        """
        commits = await github.list_commits(repo_full_name)
        saved = await self.commits.bulk_upsert(self.db, commits)
        logger.info(f"Synced {len(saved)} GitHub commits for {repo_full_name}")
        return saved

    async def get_repo_status(self, repo_path: str) -> str:
        """Return `git status` for a local checkout."""
        return await self.git.read_status(repo_path)

    # ─────────────────────────────────────────────────────────────
    # Commit summaries
    # ─────────────────────────────────────────────────────────────

    async def generate_commit_summary(
        self,
        commit_id: int,
        repo_context: str | None = None,
    ) -> Commit:
        """
        Generate and store an LLM summary for one commit.

        Args:
            commit_id: Commit store id
            repo_context: Repository name to show in the prompt; defaults to
                the commit's own repository

        Returns:
            The updated commit

        Raises:
            NotFoundError: If no commit has this id
            PreconditionError: If the commit's diff has not been fetched
            ServiceUnavailableError: If no language model provider is configured
        """
        commit = await self.commits.get(self.db, commit_id)
        if commit is None:
            raise NotFoundError("Commit")
        if commit.diff is None:
            raise PreconditionError("Diff not available. Sync commits first.")

        repo_name = repo_context or commit.repository or settings.default_repository_label
        prompt = build_commit_summary_prompt(commit, repo_name)

        raw = await self._require_llm().generate(prompt)
        text = extract_text(raw, COMMIT_SUMMARY_FALLBACK)

        commit = await self.commits.set_generated_summary(self.db, commit, text)
        logger.info(f"Generated summary for commit {commit.hash[:7]} ({repo_name})")
        return commit

    # ─────────────────────────────────────────────────────────────
    # Daily summaries
    # ─────────────────────────────────────────────────────────────

    async def generate_daily_summary(
        self,
        date: str,
        repo_full_name: str,
        force: bool = False,
    ) -> dict[str, Any]:
        """
        Return the daily summary for a repository, generating it when needed.

        A cached summary is returned as-is unless `force` is set. A day with no
        commits yields an explanatory message that is never cached.

        Args:
            date: Calendar day as "YYYY-MM-DD" (interpreted in UTC)
            repo_full_name: Repository as "owner/repo"
            force: Regenerate even if a summary is cached

        Returns:
            {"text": summary}

        Raises:
            ValidationError: If the date is malformed or impossible
            ServiceUnavailableError: If generation is needed but no language model
                provider is configured
        """
        day = parse_calendar_date(date)
        start, end = utc_day_bounds(day)

        if not force:
            cached = await self.summaries.get_by_date_repository(self.db, start, repo_full_name)
            if cached is not None:
                logger.debug(f"Daily summary cache hit for {repo_full_name} on {date}")
                return {"text": cached.summary}

        async with self.locks.hold((start, repo_full_name)):
            if not force:
                # Filled by a concurrent generation while waiting on the lock
                cached = await self.summaries.get_by_date_repository(
                    self.db, start, repo_full_name
                )
                if cached is not None:
                    return {"text": cached.summary}

            commits = await self.commits.get_in_range(
                self.db, repository_aliases(repo_full_name), start, end
            )
            if not commits:
                logger.info(f"No commits for {repo_full_name} on {date}, nothing to summarize")
                return {"text": no_commits_message(date, repo_full_name)}

            metrics = compute_daily_metrics(commits)
            prompt = build_daily_summary_prompt(date, repo_full_name, commits, metrics)

            raw = await self._require_llm().generate(prompt)
            text = extract_text(raw, DAILY_SUMMARY_FALLBACK)

            await self.summaries.upsert(self.db, start, repo_full_name, text)
            # Waiters re-check from their own sessions, so the row must be visible before release
            await self.db.commit()

        logger.info(
            f"{'Regenerated' if force else 'Generated'} daily summary for {repo_full_name} "
            f"on {date} from {metrics.total_commits} commits"
        )
        return {"text": text}

    async def get_daily_summary(self, date: str, repo_full_name: str) -> dict[str, Any] | None:
        """
        Read a cached daily summary without generating one.

        Returns:
            {"text": summary} if cached, None otherwise

        Raises:
            ValidationError: If the date is malformed or impossible
        """
        start, _ = utc_day_bounds(parse_calendar_date(date))
        cached = await self.summaries.get_by_date_repository(self.db, start, repo_full_name)
        if cached is None:
            return None
        return {"text": cached.summary}
