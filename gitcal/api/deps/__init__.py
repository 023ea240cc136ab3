"""API dependencies - re-exports from submodules."""

from .auth import (
    DbSession,
    GitHubToken,
    get_github_token,
    security,
)
from .services import (
    GitHub,
    LanguageModel,
    Notion,
    SyncService,
    get_commit_sync_service,
    get_git_reader,
    get_github_service,
    get_language_model_client,
    get_notion_service,
    get_optional_language_model_client,
)

__all__ = [
    # Auth
    "security",
    "get_github_token",
    "DbSession",
    "GitHubToken",
    # Services
    "get_language_model_client",
    "get_optional_language_model_client",
    "get_git_reader",
    "get_commit_sync_service",
    "get_github_service",
    "get_notion_service",
    "LanguageModel",
    "SyncService",
    "GitHub",
    "Notion",
]
