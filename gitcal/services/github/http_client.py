"""
Process-wide httpx client for the GitHub REST API.

One client is shared by every GitHubService instance. It holds no token:
each request carries its caller's Authorization header.
"""

import logging

import httpx

from gitcal.config import settings

logger = logging.getLogger(__name__)

_client: httpx.AsyncClient | None = None


def build_github_client() -> httpx.AsyncClient:
    """Client sized so a full batch of diff requests can run without queueing."""
    concurrency = max(1, settings.github_diff_concurrency)
    return httpx.AsyncClient(
        headers={"User-Agent": settings.github_user_agent},
        timeout=httpx.Timeout(
            settings.github_timeout_seconds,
            connect=settings.github_connect_timeout_seconds,
        ),
        limits=httpx.Limits(
            max_connections=concurrency * 2,
            max_keepalive_connections=concurrency,
        ),
        http2=True,
    )


def get_github_client() -> httpx.AsyncClient:
    """Return the shared client, creating it on first use or after close."""
    global _client
    if _client is None or _client.is_closed:
        _client = build_github_client()
        logger.debug(f"Opened GitHub client (diff concurrency {settings.github_diff_concurrency})")
    return _client


async def close_github_client() -> None:
    """Close the shared client on shutdown. Safe to call when none is open."""
    global _client
    client, _client = _client, None
    if client is not None and not client.is_closed:
        await client.aclose()
        logger.debug("Closed GitHub client")
