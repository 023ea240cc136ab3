from gitcal.models.commit import Commit, CommitRead
from gitcal.models.daily_summary import DailySummary

__all__ = [
    "Commit",
    "CommitRead",
    "DailySummary",
]
