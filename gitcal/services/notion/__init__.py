"""Notion sink for daily summaries."""

from .service import NotionService, truncate_rich_text

__all__ = ["NotionService", "truncate_rich_text"]
