"""
Commit sync and summary endpoints used by the calendar UI.
"""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gitcal.api.deps import GitHub, SyncService
from gitcal.models.commit import Commit, CommitRead
from gitcal.services.commits import parse_calendar_date
from gitcal.services.github import split_full_name

router = APIRouter(prefix="/git", tags=["git"])
logger = logging.getLogger(__name__)


def check_day_and_repo(date: str, repo_full_name: str) -> None:
    """
    Reject a malformed calendar day or repository name before any work is done.

    Raises:
        ValidationError: If date is not a real YYYY-MM-DD day or the name is not owner/repo
    """
    parse_calendar_date(date)
    split_full_name(repo_full_name)


# --- Request / Response Models ---


class CamelModel(BaseModel):
    """Request body accepting camelCase keys from the UI."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SyncCommitsRequest(CamelModel):
    repo_path: str = Field(min_length=1, description="Path to a local git checkout")


class GitHubCommitsRequest(CamelModel):
    repo: str = Field(description='Repository as "owner/repo"')


class CommitSummaryRequest(CamelModel):
    """Request to summarize one stored commit."""

    commit_id: int = Field(strict=True, gt=0)
    repo_context: str | None = Field(
        default=None,
        description="Repository name shown to the model; defaults to the commit's repository",
    )


class DailySummaryRequest(CamelModel):
    """Request to generate (or return the cached) summary of one day."""

    date: str = Field(description="Calendar day, YYYY-MM-DD (UTC)")
    repo_full_name: str = Field(description="owner/repo")
    force: bool = False


class SummaryText(BaseModel):
    text: str


class SummaryMissing(BaseModel):
    exists: bool = False


# --- Endpoints ---


@router.post("/sync-commits", response_model=list[CommitRead])
async def sync_commits(
    data: SyncCommitsRequest,
    service: SyncService,
) -> list[Commit]:
    """Read recent commits of a local checkout, with diffs, into the commit store."""
    return await service.sync_commits(data.repo_path)


@router.get("/repo-status", response_class=PlainTextResponse)
async def get_repo_status(
    service: SyncService,
    repo_path: str = Query(..., alias="repoPath", min_length=1),
) -> str:
    """Return `git status` output of a local checkout."""
    return await service.get_repo_status(repo_path)


@router.get("/user-repos", response_model=list[str])
async def list_user_repos(github: GitHub) -> list[str]:
    """List the caller's GitHub repositories as owner/repo, most recently updated first."""
    return await github.list_repositories()


@router.post("/github-commits", response_model=list[CommitRead])
async def sync_github_commits(
    data: GitHubCommitsRequest,
    github: GitHub,
    service: SyncService,
) -> list[Commit]:
    """
    Fetch recent commits of a GitHub repository and store them.

    Commits whose diff could not be fetched are returned (and stored) without one.
    """
    split_full_name(data.repo)
    return await service.sync_github_commits(github, data.repo)


@router.post("/generate-commit-summary", response_model=CommitRead)
async def generate_commit_summary(
    data: CommitSummaryRequest,
    service: SyncService,
) -> Commit:
    """Summarize a stored commit from its diff and return the updated commit."""
    return await service.generate_commit_summary(data.commit_id, data.repo_context)


@router.post("/generate-daily-summary", response_model=SummaryText)
async def generate_daily_summary(
    data: DailySummaryRequest,
    service: SyncService,
) -> dict:
    """
    Return the summary of one day's commits, generating and caching it when needed.

    With `force`, the cached summary is regenerated in place.
    """
    check_day_and_repo(data.date, data.repo_full_name)
    return await service.generate_daily_summary(data.date, data.repo_full_name, data.force)


@router.get("/daily-summary", response_model=SummaryText | SummaryMissing)
async def get_daily_summary(
    service: SyncService,
    date: str = Query(...),
    repo_full_name: str = Query(..., alias="repoFullName"),
) -> dict:
    """Return the cached daily summary, or `{"exists": false}`. Never generates."""
    check_day_and_repo(date, repo_full_name)
    cached = await service.get_daily_summary(date, repo_full_name)
    if cached is None:
        return {"exists": False}
    return cached
