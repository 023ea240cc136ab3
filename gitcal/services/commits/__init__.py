"""Commit sync, prompts, metrics and the summary orchestrator."""

from .dates import parse_calendar_date, utc_day_bounds
from .metrics import DailyMetrics, compute_daily_metrics
from .sync_service import CommitSyncService

__all__ = [
    "CommitSyncService",
    "DailyMetrics",
    "compute_daily_metrics",
    "parse_calendar_date",
    "utc_day_bounds",
]
