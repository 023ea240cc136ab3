"""API endpoint tests for commit sync and summary routes.

Tests the HTTP layer: request validation, camelCase response shapes, error
codes, and argument passing to the (mocked) CommitSyncService.
"""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from gitcal.core.exceptions import (
    NotFoundError,
    PreconditionError,
    ProcessError,
    ServiceUnavailableError,
)
from gitcal.services.github import GitHubAPIError

from tests.helpers.mock_factories import make_commit

BASE = "/api/v1/git"


# ═══════════════════════════════════════════════════════════════════════════
# POST /git/sync-commits
# ═══════════════════════════════════════════════════════════════════════════


class TestSyncCommits:
    @pytest.mark.asyncio
    async def test_returns_commits_in_camel_case(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.sync_commits.return_value = [
            make_commit(id=7, repository="calendar", generated_summary=None)
        ]

        response = await api_client.post(
            f"{BASE}/sync-commits", json={"repoPath": "/code/calendar"}
        )

        assert response.status_code == 200
        [commit] = response.json()
        assert commit["id"] == 7
        assert commit["repository"] == "calendar"
        assert commit["generatedSummary"] is None
        assert "generated_summary" not in commit
        mock_sync_service.sync_commits.assert_awaited_once_with("/code/calendar")

    @pytest.mark.asyncio
    async def test_missing_repo_path_is_422(self, api_client: AsyncClient, mock_sync_service):
        response = await api_client.post(f"{BASE}/sync-commits", json={})

        assert response.status_code == 422
        mock_sync_service.sync_commits.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_git_failure_is_500(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.sync_commits.side_effect = ProcessError(
            "git log failed with exit code 128", returncode=128
        )

        response = await api_client.post(f"{BASE}/sync-commits", json={"repoPath": "/nope"})

        assert response.status_code == 500
        assert response.json()["detail"] == "git log failed with exit code 128"


# ═══════════════════════════════════════════════════════════════════════════
# GET /git/repo-status
# ═══════════════════════════════════════════════════════════════════════════


class TestRepoStatus:
    @pytest.mark.asyncio
    async def test_returns_plain_text(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.get_repo_status.return_value = "On branch main"

        response = await api_client.get(f"{BASE}/repo-status", params={"repoPath": "/code/cal"})

        assert response.status_code == 200
        assert response.text == "On branch main"
        assert response.headers["content-type"].startswith("text/plain")
        mock_sync_service.get_repo_status.assert_awaited_once_with("/code/cal")

    @pytest.mark.asyncio
    async def test_missing_path_is_422(self, api_client: AsyncClient):
        response = await api_client.get(f"{BASE}/repo-status")

        assert response.status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# GET /git/user-repos and POST /git/github-commits
# ═══════════════════════════════════════════════════════════════════════════


class TestGitHubRoutes:
    @pytest.mark.asyncio
    async def test_user_repos_requires_bearer(self, api_client: AsyncClient, mock_github_service):
        response = await api_client.get(f"{BASE}/user-repos")

        assert response.status_code == 401
        mock_github_service.list_repositories.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_repos_rejects_invalid_session(self, api_client: AsyncClient):
        response = await api_client.get(
            f"{BASE}/user-repos", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_user_repos_lists_full_names(
        self, api_client: AsyncClient, auth_headers, mock_github_service
    ):
        mock_github_service.list_repositories.return_value = ["octo/calendar", "octo/api"]

        response = await api_client.get(f"{BASE}/user-repos", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == ["octo/calendar", "octo/api"]

    @pytest.mark.asyncio
    async def test_user_repos_upstream_failure_is_502(
        self, api_client: AsyncClient, auth_headers, mock_github_service
    ):
        mock_github_service.list_repositories.side_effect = GitHubAPIError(
            "Invalid or expired GitHub token", status_code=401
        )

        response = await api_client.get(f"{BASE}/user-repos", headers=auth_headers)

        assert response.status_code == 502

    @pytest.mark.asyncio
    async def test_github_commits_syncs_through_service(
        self, api_client: AsyncClient, auth_headers, mock_sync_service, mock_github_service
    ):
        mock_sync_service.sync_github_commits.return_value = [
            make_commit(id=1, hash="c2"),
            make_commit(id=2, hash="c1", diff=None),
        ]

        response = await api_client.post(
            f"{BASE}/github-commits", json={"repo": "octo/calendar"}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert [c["hash"] for c in body] == ["c2", "c1"]
        assert body[1]["diff"] is None
        mock_sync_service.sync_github_commits.assert_awaited_once_with(
            mock_github_service, "octo/calendar"
        )

    @pytest.mark.asyncio
    async def test_github_commits_rejects_malformed_repo(
        self, api_client: AsyncClient, auth_headers, mock_sync_service
    ):
        response = await api_client.post(
            f"{BASE}/github-commits", json={"repo": "calendar"}, headers=auth_headers
        )

        assert response.status_code == 400
        mock_sync_service.sync_github_commits.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_github_commits_requires_bearer(self, api_client: AsyncClient, mock_sync_service):
        response = await api_client.post(f"{BASE}/github-commits", json={"repo": "octo/calendar"})

        assert response.status_code == 401
        mock_sync_service.sync_github_commits.assert_not_awaited()


# ═══════════════════════════════════════════════════════════════════════════
# POST /git/generate-commit-summary
# ═══════════════════════════════════════════════════════════════════════════


class TestGenerateCommitSummary:
    @pytest.mark.asyncio
    async def test_returns_updated_commit(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.generate_commit_summary.return_value = make_commit(
            id=3, generated_summary="### WHAT CHANGED"
        )

        response = await api_client.post(
            f"{BASE}/generate-commit-summary",
            json={"commitId": 3, "repoContext": "Calendar"},
        )

        assert response.status_code == 200
        assert response.json()["generatedSummary"] == "### WHAT CHANGED"
        mock_sync_service.generate_commit_summary.assert_awaited_once_with(3, "Calendar")

    @pytest.mark.asyncio
    async def test_repo_context_is_optional(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.generate_commit_summary.return_value = make_commit(id=3)

        await api_client.post(f"{BASE}/generate-commit-summary", json={"commitId": 3})

        mock_sync_service.generate_commit_summary.assert_awaited_once_with(3, None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("commit_id", ["3", 0, -1, 1.5, None])
    async def test_rejects_non_positive_or_non_integer_ids(
        self, api_client: AsyncClient, mock_sync_service, commit_id
    ):
        response = await api_client.post(
            f"{BASE}/generate-commit-summary", json={"commitId": commit_id}
        )

        assert response.status_code == 422
        mock_sync_service.generate_commit_summary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_commit_is_404(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.generate_commit_summary.side_effect = NotFoundError("Commit")

        response = await api_client.post(f"{BASE}/generate-commit-summary", json={"commitId": 9})

        assert response.status_code == 404
        assert response.json()["detail"] == "Commit not found"

    @pytest.mark.asyncio
    async def test_missing_diff_is_409(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.generate_commit_summary.side_effect = PreconditionError(
            "Diff not available. Sync commits first."
        )

        response = await api_client.post(f"{BASE}/generate-commit-summary", json={"commitId": 9})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unconfigured_provider_is_503(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.generate_commit_summary.side_effect = ServiceUnavailableError(
            "Language model provider is not configured"
        )

        response = await api_client.post(f"{BASE}/generate-commit-summary", json={"commitId": 9})

        assert response.status_code == 503


# ═══════════════════════════════════════════════════════════════════════════
# Daily summaries
# ═══════════════════════════════════════════════════════════════════════════


class TestGenerateDailySummary:
    @pytest.mark.asyncio
    async def test_returns_text(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.generate_daily_summary.return_value = {"text": "## SUMMARY OF CHANGES"}

        response = await api_client.post(
            f"{BASE}/generate-daily-summary",
            json={"date": "2024-03-15", "repoFullName": "octo/calendar"},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "## SUMMARY OF CHANGES"}
        mock_sync_service.generate_daily_summary.assert_awaited_once_with(
            "2024-03-15", "octo/calendar", False
        )

    @pytest.mark.asyncio
    async def test_force_flag_is_passed(self, api_client: AsyncClient, mock_sync_service):
        await api_client.post(
            f"{BASE}/generate-daily-summary",
            json={"date": "2024-03-15", "repoFullName": "octo/calendar", "force": True},
        )

        mock_sync_service.generate_daily_summary.assert_awaited_once_with(
            "2024-03-15", "octo/calendar", True
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"date": "15/03/2024", "repoFullName": "octo/calendar"},
            {"date": "2024-02-30", "repoFullName": "octo/calendar"},
            {"date": "2024-03-15", "repoFullName": "calendar"},
            {"date": "2024-03-15", "repoFullName": "octo/cal/extra"},
        ],
    )
    async def test_malformed_date_or_repo_is_400(
        self, api_client: AsyncClient, mock_sync_service, body
    ):
        response = await api_client.post(f"{BASE}/generate-daily-summary", json=body)

        assert response.status_code == 400
        mock_sync_service.generate_daily_summary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_date_is_422(self, api_client: AsyncClient, mock_sync_service):
        response = await api_client.post(
            f"{BASE}/generate-daily-summary", json={"repoFullName": "octo/calendar"}
        )

        assert response.status_code == 422
        mock_sync_service.generate_daily_summary.assert_not_awaited()


class TestGetDailySummary:
    @pytest.mark.asyncio
    async def test_returns_cached_text(self, api_client: AsyncClient, mock_sync_service):
        mock_sync_service.get_daily_summary.return_value = {"text": "cached"}

        response = await api_client.get(
            f"{BASE}/daily-summary",
            params={"date": "2024-03-15", "repoFullName": "octo/calendar"},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "cached"}
        mock_sync_service.get_daily_summary.assert_awaited_once_with("2024-03-15", "octo/calendar")

    @pytest.mark.asyncio
    async def test_reports_missing_summary(self, api_client: AsyncClient, mock_sync_service):
        response = await api_client.get(
            f"{BASE}/daily-summary",
            params={"date": "2024-03-15", "repoFullName": "octo/calendar"},
        )

        assert response.status_code == 200
        assert response.json() == {"exists": False}
        mock_sync_service.generate_daily_summary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_date_is_400(self, api_client: AsyncClient, mock_sync_service):
        response = await api_client.get(
            f"{BASE}/daily-summary",
            params={"date": "2024-3-15", "repoFullName": "octo/calendar"},
        )

        assert response.status_code == 400
        assert "YYYY-MM-DD" in response.json()["detail"]
        mock_sync_service.get_daily_summary.assert_not_awaited()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, api_client: AsyncClient):
        response = await api_client.get("/health")

        assert response.json() == {"status": "healthy"}
