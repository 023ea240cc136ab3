"""
Local git access.

Usage: `from gitcal.services.git import GitReader`
"""

from gitcal.services.git.reader import LOG_FORMAT, GitReader, parse_log_output

__all__ = [
    "GitReader",
    "LOG_FORMAT",
    "parse_log_output",
]
