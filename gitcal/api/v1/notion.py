"""
Notion export of daily summaries.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gitcal.api.deps import Notion, get_github_token
from gitcal.api.v1.git import check_day_and_repo

router = APIRouter(
    prefix="/notion",
    tags=["notion"],
    dependencies=[Depends(get_github_token)],
)
logger = logging.getLogger(__name__)


class NotionSyncRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str
    repo_full_name: str
    summary: str = Field(min_length=1)


class NotionSyncResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    message: str
    page_id: str | None = None


@router.post("/sync-daily-summary", response_model=NotionSyncResponse)
async def sync_daily_summary(
    data: NotionSyncRequest,
    notion: Notion,
) -> dict[str, Any]:
    """Create or update the Notion page holding this day's summary."""
    check_day_and_repo(data.date, data.repo_full_name)
    return await notion.sync_daily_summary(data.date, data.repo_full_name, data.summary)


@router.get("/database-schema")
async def get_database_schema(notion: Notion) -> dict[str, Any]:
    """Return the configured Notion database's id and properties."""
    return await notion.get_database_schema()
