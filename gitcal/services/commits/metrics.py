"""Heuristic activity metrics computed from commit diffs."""

import re
from dataclasses import dataclass

from gitcal.models.commit import Commit

FILE_HEADER_RE = re.compile(r"^diff --git", re.MULTILINE)
DECLARATION_RE = re.compile(
    r"^[+-]\s*(function|const\s+\w+\s+=\s+\(|class\s+\w+|def\s+\w+)",
    re.MULTILINE,
)

FILE_WEIGHT = 2
DECLARATION_WEIGHT = 3


@dataclass
class DailyMetrics:
    """Aggregate context about one day's commits, fed to the daily prompt."""

    total_commits: int
    unique_authors: int
    lines_changed: int  # Approximate: includes +++/--- file header lines
    complexity_score: int  # Higher means more complex changes


def count_changed_lines(diff: str) -> int:
    """Count diff lines starting with "+" or "-"."""
    return sum(1 for line in diff.split("\n") if line.startswith(("+", "-")))


def complexity_score(diff: str) -> int:
    """Weighted count of touched files and changed declaration lines."""
    files_changed = len(FILE_HEADER_RE.findall(diff))
    declarations_changed = len(DECLARATION_RE.findall(diff))
    return files_changed * FILE_WEIGHT + declarations_changed * DECLARATION_WEIGHT


def compute_daily_metrics(commits: list[Commit]) -> DailyMetrics:
    """Aggregate metrics over a day's commits. Commits without a diff count only toward totals."""
    lines_changed = 0
    score = 0
    for commit in commits:
        if commit.diff:
            lines_changed += count_changed_lines(commit.diff)
            score += complexity_score(commit.diff)

    return DailyMetrics(
        total_commits=len(commits),
        unique_authors=len({c.author for c in commits}),
        lines_changed=lines_changed,
        complexity_score=score,
    )
