"""Exceptions for GitHub service."""

from gitcal.core.exceptions import UpstreamError


class GitHubAPIError(UpstreamError):
    """Error from GitHub API.

    `upstream_status` is the status GitHub answered with, or None when the
    request never got a response (DNS, TLS, timeout).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        super().__init__(
            message,
            upstream_status=status_code,
            rate_limit_reset=rate_limit_reset,
        )
