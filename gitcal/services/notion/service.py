"""Thin Notion client for pushing daily summaries into a database.

Uses Notion's REST API directly via httpx, no SDK needed. The target database
is expected to have these properties:
- "Name" (title)
- "Date of Commit" (date)
- "Repository" (rich text)
- "Summary" (rich text)
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from gitcal.config import Settings, settings
from gitcal.core.exceptions import ServiceUnavailableError, UpstreamError

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"

TITLE_PROPERTY = "Name"
DATE_PROPERTY = "Date of Commit"
REPOSITORY_PROPERTY = "Repository"
SUMMARY_PROPERTY = "Summary"

# Notion rejects rich text objects longer than this
RICH_TEXT_LIMIT = 2000


def truncate_rich_text(text: str, limit: int = RICH_TEXT_LIMIT) -> str:
    """Clip text to Notion's rich text limit, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _rich_text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def _paragraph(content: str) -> dict[str, Any]:
    """Paragraph block holding the full text, split into rich text chunks Notion accepts."""
    chunks = [content[i : i + RICH_TEXT_LIMIT] for i in range(0, len(content), RICH_TEXT_LIMIT)]
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {
            "rich_text": [{"type": "text", "text": {"content": c}} for c in chunks or [""]],
        },
    }


class NotionService:
    """Create or update one Notion page per (day, repository) summary."""

    def __init__(
        self,
        config: Settings = settings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = config.notion_api_key
        self.database_id = config.notion_database_id
        self.notion_version = config.notion_version
        self.enabled = config.notion_enabled
        self._client = client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _require_enabled(self) -> None:
        if not self.enabled:
            raise ServiceUnavailableError("Notion integration is not configured")

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a short-lived one for this operation."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(base_url=NOTION_API_URL, timeout=15.0) as client:
            yield client

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        action: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Send one Notion API request and return the decoded body.

        Raises:
            UpstreamError: On transport failure or a non-2xx response
        """
        try:
            response = await client.request(method, path, json=json, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"[notion] HTTP {e.response.status_code} during {action}: {e.response.text}"
            )
            raise UpstreamError(
                f"Failed to {action}: Notion returned {e.response.status_code}",
                upstream_status=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"[notion] Request failed during {action}: {e}")
            raise UpstreamError(f"Failed to {action}: {e}") from e

        return response.json()

    async def get_database_schema(self) -> dict[str, Any]:
        """
        Return the target database's id and property definitions.

        Raises:
            ServiceUnavailableError: If Notion is not configured
            UpstreamError: If the Notion API call fails
        """
        self._require_enabled()
        async with self._session() as client:
            database = await self._request(
                client,
                "GET",
                f"/databases/{self.database_id}",
                "get Notion database schema",
            )
        return {"id": database.get("id"), "properties": database.get("properties", {})}

    async def sync_daily_summary(
        self,
        date: str,
        repo_full_name: str,
        summary: str,
    ) -> dict[str, Any]:
        """
        Write a daily summary to Notion.

        An existing page for the same day and repository gets its Summary
        property replaced and the full text appended as a new paragraph;
        otherwise a new page is created.

        Args:
            date: Calendar day as "YYYY-MM-DD"
            repo_full_name: Repository as "owner/repo"
            summary: Summary text

        Returns:
            {"success": True, "message": ..., "pageId": ...}

        Raises:
            ServiceUnavailableError: If Notion is not configured
            UpstreamError: If any Notion API call fails
        """
        self._require_enabled()

        async with self._session() as client:
            query = await self._request(
                client,
                "POST",
                f"/databases/{self.database_id}/query",
                "search Notion database",
                json={
                    "filter": {
                        "and": [
                            {"property": DATE_PROPERTY, "date": {"equals": date}},
                            {
                                "property": REPOSITORY_PROPERTY,
                                "rich_text": {"equals": repo_full_name},
                            },
                        ]
                    }
                },
            )

            pages = query.get("results", [])
            if pages:
                page_id = pages[0]["id"]
                await self._update_page(client, page_id, summary)
                logger.info(f"[notion] Updated summary page for {repo_full_name} on {date}")
                return {"success": True, "message": "Summary updated in Notion", "pageId": page_id}

            page = await self._create_page(client, date, repo_full_name, summary)
            logger.info(f"[notion] Created summary page for {repo_full_name} on {date}")
            return {"success": True, "message": "Summary created in Notion", "pageId": page.get("id")}

    async def _update_page(self, client: httpx.AsyncClient, page_id: str, summary: str) -> None:
        await self._request(
            client,
            "PATCH",
            f"/pages/{page_id}",
            "update Notion page",
            json={
                "properties": {
                    SUMMARY_PROPERTY: {"rich_text": _rich_text(truncate_rich_text(summary))},
                }
            },
        )
        await self._request(
            client,
            "PATCH",
            f"/blocks/{page_id}/children",
            "append Notion page content",
            json={"children": [_paragraph(summary)]},
        )

    async def _create_page(
        self,
        client: httpx.AsyncClient,
        date: str,
        repo_full_name: str,
        summary: str,
    ) -> dict[str, Any]:
        return await self._request(
            client,
            "POST",
            "/pages",
            "create Notion page",
            json={
                "parent": {"database_id": self.database_id},
                "properties": {
                    DATE_PROPERTY: {"date": {"start": date}},
                    REPOSITORY_PROPERTY: {"rich_text": _rich_text(repo_full_name)},
                    TITLE_PROPERTY: {
                        "title": _rich_text(f"Daily Summary for {repo_full_name} on {date}"),
                    },
                    SUMMARY_PROPERTY: {"rich_text": _rich_text(truncate_rich_text(summary))},
                },
                "children": [_paragraph(summary)],
            },
        )
