"""
GitHub API helper utilities.

Provides rate limit handling, error response processing and repository
name parsing for GitHub API calls.
"""

import logging

import httpx

from gitcal.core.exceptions import ValidationError
from gitcal.services.github.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def split_full_name(repo_full_name: str) -> tuple[str, str]:
    """
    Split "owner/repo" into its parts.

    Raises:
        ValidationError: Unless the name has exactly one "/" with text on both sides
    """
    parts = repo_full_name.split("/")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise ValidationError('Invalid repository format. Expected "owner/repo"')
    return parts[0], parts[1]


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Raise for non-2xx responses from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: What was requested, for error context (e.g. "owner/repo")

    Raises:
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {resource}", 404)
    elif response.status_code in (403, 429):
        if rate_info.is_exhausted or response.status_code == 429:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)

    raise GitHubAPIError(
        f"GitHub API error: {response.status_code} {response.reason_phrase}".strip(),
        response.status_code,
    )
