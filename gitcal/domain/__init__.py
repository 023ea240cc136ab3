from gitcal.domain.commit_operations import commit_ops
from gitcal.domain.daily_summary_operations import daily_summary_ops

__all__ = [
    "commit_ops",
    "daily_summary_ops",
]
