"""Root conftest — test infrastructure for all backend tests.

Provides:
- Mocked request-scoped DB session
- Mocked service fixtures (commit sync, GitHub, Notion, language model)
- API client with dependency overrides
- Autouse guard against real GitHub calls
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from gitcal.core.security import create_session_token

# ─────────────────────────────────────────────────────────────────────────────
# Mocked dependencies
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def db_session() -> AsyncMock:
    """AsyncSession stand-in; unit tests never touch a real database."""
    return AsyncMock()


@pytest.fixture
def mock_sync_service() -> MagicMock:
    service = MagicMock()
    service.sync_commits = AsyncMock(return_value=[])
    service.sync_github_commits = AsyncMock(return_value=[])
    service.get_repo_status = AsyncMock(return_value="")
    service.generate_commit_summary = AsyncMock()
    service.generate_daily_summary = AsyncMock(return_value={"text": ""})
    service.get_daily_summary = AsyncMock(return_value=None)
    return service


@pytest.fixture
def mock_github_service() -> MagicMock:
    github = MagicMock()
    github.list_repositories = AsyncMock(return_value=[])
    github.list_commits = AsyncMock(return_value=[])
    return github


@pytest.fixture
def mock_notion_service() -> MagicMock:
    notion = MagicMock()
    notion.sync_daily_summary = AsyncMock()
    notion.get_database_schema = AsyncMock()
    return notion


@pytest.fixture
def mock_language_model() -> MagicMock:
    llm = MagicMock()
    llm.generate = AsyncMock(return_value={"content": [{"type": "text", "text": "Hello"}]})
    return llm


@pytest.fixture
def session_token() -> str:
    return create_session_token("gho_test_token")


@pytest.fixture
def auth_headers(session_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {session_token}"}


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(
    db_session,
    mock_sync_service,
    mock_github_service,
    mock_notion_service,
    mock_language_model,
):
    """HTTP client with every service dependency replaced by a mock.

    Bearer auth is NOT overridden: protected endpoints need `auth_headers`.
    Overrides: get_db, get_commit_sync_service, get_language_model_client,
    get_notion_service, and the GitHub client construction.
    """
    from gitcal.api.deps import (
        get_commit_sync_service,
        get_language_model_client,
        get_notion_service,
    )
    from gitcal.core.database import get_db
    from gitcal.main import app

    async def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_commit_sync_service] = lambda: mock_sync_service
    app.dependency_overrides[get_language_model_client] = lambda: mock_language_model
    app.dependency_overrides[get_notion_service] = lambda: mock_notion_service

    with patch("gitcal.api.deps.services.GitHubService", return_value=mock_github_service):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────────────────
# External Service Guard (autouse)
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def mock_external_services():
    """SAFETY: never reach GitHub from tests.

    Tests that exercise GitHubService patch get_github_client themselves;
    this guard only catches calls that slip through.
    """
    client = MagicMock()
    client.get = AsyncMock(side_effect=AssertionError("Unexpected real GitHub call"))
    with patch("gitcal.services.github.service.get_github_client", return_value=client):
        yield {"github_client": client}
