"""Service construction dependencies.

Each request gets its own CommitSyncService bound to the request's database
session. The language model client is built once per process and reused.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from gitcal.api.deps.auth import DbSession, GitHubToken
from gitcal.config import settings
from gitcal.core.exceptions import ServiceUnavailableError
from gitcal.services.commits import CommitSyncService
from gitcal.services.git import GitReader
from gitcal.services.github import GitHubService
from gitcal.services.llm import (
    BaseLanguageModelClient,
    LanguageModelConfigError,
    build_language_model_client,
)
from gitcal.services.notion import NotionService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _language_model_client() -> BaseLanguageModelClient:
    return build_language_model_client(settings)


def get_language_model_client() -> BaseLanguageModelClient:
    """
    Return the configured language model client.

    Raises:
        ServiceUnavailableError: If the provider is unknown or has no API key
    """
    try:
        return _language_model_client()
    except LanguageModelConfigError as e:
        logger.error(f"Language model not configured: {e}")
        raise ServiceUnavailableError(str(e)) from e


LanguageModel = Annotated[BaseLanguageModelClient, Depends(get_language_model_client)]


def get_optional_language_model_client() -> BaseLanguageModelClient | None:
    """Configured client, or None so endpoints that never generate still work."""
    try:
        return _language_model_client()
    except LanguageModelConfigError:
        return None


def get_git_reader() -> GitReader:
    return GitReader()


def get_commit_sync_service(
    db: DbSession,
    llm: BaseLanguageModelClient | None = Depends(get_optional_language_model_client),
    git_reader: GitReader = Depends(get_git_reader),
) -> CommitSyncService:
    return CommitSyncService(db, llm, git_reader=git_reader)


def get_github_service(token: GitHubToken) -> GitHubService:
    """GitHub client acting with the caller's access token."""
    return GitHubService(token)


def get_notion_service() -> NotionService:
    return NotionService(settings)


SyncService = Annotated[CommitSyncService, Depends(get_commit_sync_service)]
GitHub = Annotated[GitHubService, Depends(get_github_service)]
Notion = Annotated[NotionService, Depends(get_notion_service)]
