"""
GitHub API service for repository and commit listing.

Handles the GitHub REST API interactions the calendar needs:
- Listing the authenticated user's repositories
- Listing recent commits of a repository, each with its unified diff
- Rate limit and transport error handling
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

import httpx

from gitcal.config import settings
from gitcal.models.commit import Commit
from gitcal.services.github.exceptions import GitHubAPIError
from gitcal.services.github.helpers import handle_error_response, split_full_name
from gitcal.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)


class GitHubService:
    """
    Service for interacting with GitHub REST API on behalf of one token.

    Uses a shared HTTP client singleton for connection pooling.
    Listing is limited to the first page of 100 items; deeper pagination
    is not implemented.
    """

    API_VERSION = "2022-11-28"
    DIFF_MEDIA_TYPE = "application/vnd.github.diff"
    MAX_PER_PAGE = 100

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        diff_concurrency: int | None = None,
    ):
        self.token = token
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self.diff_concurrency = max(1, diff_concurrency or settings.github_diff_concurrency)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    async def _get(
        self,
        path: str,
        params: dict[str, str | int] | None = None,
        accept: str | None = None,
    ) -> httpx.Response:
        """GET a GitHub API path, wrapping transport failures in GitHubAPIError."""
        headers = self._headers if accept is None else {**self._headers, "Accept": accept}
        client = get_github_client()
        try:
            return await client.get(
                f"{self.base_url}{path}",
                headers=headers,
                params=params,
            )
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"GitHub request failed: {e}") from e

    def _normalize_commit(self, data: dict[str, Any], repo_full_name: str) -> Commit | None:
        """
        Convert a GitHub commit list item to an unsaved Commit.

        The author date falls back to the committer date (GitHub sends a null
        author for some imported commits). Returns None if neither is usable.
        """
        commit_data = data.get("commit") or {}
        author_data = commit_data.get("author") or {}
        committer_data = commit_data.get("committer") or {}
        message_lines = (commit_data.get("message") or "").split("\n")

        raw_date = author_data.get("date") or committer_data.get("date")
        try:
            committed_at = datetime.fromisoformat(raw_date)
        except (TypeError, ValueError):
            logger.warning(
                f"Skipping {repo_full_name}@{str(data.get('sha'))[:7]}: no usable commit date"
            )
            return None

        return Commit(
            hash=data["sha"],
            author=author_data.get("name") or committer_data.get("name") or "Unknown",
            date=committed_at,
            message=message_lines[0],
            summary="\n".join(message_lines[1:]).strip() or None,
            repository=repo_full_name,
        )

    async def list_repositories(self) -> list[str]:
        """
        Fetch full names of the authenticated user's repositories.

        Returns:
            Up to 100 "owner/repo" names, most recently updated first

        Raises:
            GitHubAPIError: On a non-2xx response or transport failure
        """
        params: dict[str, str | int] = {
            "per_page": self.MAX_PER_PAGE,
            "sort": "updated",
            "direction": "desc",
        }
        response = await self._get("/user/repos", params=params)
        handle_error_response(response, "user repositories")

        return [repo["full_name"] for repo in response.json()]

    async def get_commit_diff(self, owner: str, repo: str, sha: str) -> str | None:
        """
        Fetch the unified diff of a single commit.

        Returns:
            Diff text, or None if the fetch fails for any reason
        """
        try:
            response = await self._get(
                f"/repos/{owner}/{repo}/commits/{sha}",
                accept=self.DIFF_MEDIA_TYPE,
            )
        except GitHubAPIError as e:
            logger.warning(f"Diff fetch failed for {owner}/{repo}@{sha[:7]}: {e.message}")
            return None

        if response.status_code != 200:
            logger.warning(
                f"Diff fetch for {owner}/{repo}@{sha[:7]} returned {response.status_code}"
            )
            return None

        return response.text

    async def list_commits(self, repo_full_name: str) -> list[Commit]:
        """
        Fetch recent commits of a repository together with their diffs.

        Diffs are fetched one request per commit with bounded concurrency.
        A failed diff leaves that commit's diff unset; the rest of the batch
        is unaffected.

        Args:
            repo_full_name: Repository as "owner/repo"

        Returns:
            Up to 100 unsaved commits, newest first

        Raises:
            ValidationError: If repo_full_name is not "owner/repo"
            GitHubAPIError: If the commit list request fails
        """
        owner, repo = split_full_name(repo_full_name)

        response = await self._get(
            f"/repos/{owner}/{repo}/commits",
            params={"per_page": self.MAX_PER_PAGE},
        )
        handle_error_response(response, repo_full_name)

        commits: list[Commit] = []
        for item in response.json():
            commit = self._normalize_commit(item, repo_full_name)
            if commit is not None:
                commits.append(commit)

        semaphore = asyncio.Semaphore(self.diff_concurrency)

        async def fetch_with_limit(commit: Commit) -> str | None:
            async with semaphore:
                return await self.get_commit_diff(owner, repo, commit.hash)

        diffs = await asyncio.gather(
            *(fetch_with_limit(c) for c in commits),
            return_exceptions=True,
        )

        for commit, diff in zip(commits, diffs, strict=True):
            if isinstance(diff, BaseException):
                logger.warning(f"Diff fetch crashed for {repo_full_name}@{commit.hash[:7]}: {diff}")
                continue
            commit.diff = diff

        missing = sum(1 for c in commits if c.diff is None)
        logger.info(
            f"Fetched {len(commits)} commits for {repo_full_name}"
            + (f" ({missing} without diff)" if missing else "")
        )
        return commits
