"""
GitHub service package.

Usage: `from gitcal.services.github import GitHubService`

Module structure:
- service.py: GitHubService (repositories, commits with diffs)
- helpers.py: Rate limit handling, error utilities, repo name parsing
- http_client.py: Shared pooled HTTP client
- exceptions.py: Custom exceptions
"""

from gitcal.services.github.exceptions import GitHubAPIError
from gitcal.services.github.helpers import RateLimitInfo, handle_error_response, split_full_name
from gitcal.services.github.http_client import close_github_client, get_github_client
from gitcal.services.github.service import GitHubService

__all__ = [
    # Service (main entry point)
    "GitHubService",
    # HTTP client lifecycle
    "close_github_client",
    "get_github_client",
    # Utilities
    "handle_error_response",
    "split_full_name",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
]
