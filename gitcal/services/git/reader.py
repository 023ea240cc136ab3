"""
Read-only access to a local git checkout.

Runs `git log`, `git show` and `git status` as asyncio subprocesses and parses
their text output. Each call resolves to the complete stdout or raises
ProcessError; stream plumbing stays inside `_run`.

Known edge case: log records are delimited by a line containing only `---`.
A commit body that itself contains such a line is split into two records.
"""

import asyncio
import logging
from datetime import UTC, datetime

from gitcal.core.exceptions import ProcessError
from gitcal.models.commit import Commit

logger = logging.getLogger(__name__)

# hash, author, epoch seconds, subject, body, record separator
LOG_FORMAT = "%H%n%an%n%at%n%s%n%b%n---"
RECORD_SEPARATOR = "---\n"


def parse_log_output(output: str) -> list[Commit]:
    """
    Parse `git log --pretty=format:<LOG_FORMAT>` output into Commit objects.

    The returned commits carry hash, author, date, message and summary only;
    repository and diff are attached by the caller.
    """
    # The last record's separator has no trailing newline
    text = output.rstrip()
    if text.endswith("---"):
        text = text[:-3]

    commits: list[Commit] = []
    for chunk in text.split(RECORD_SEPARATOR):
        if not chunk.strip():
            continue
        lines = chunk.split("\n")
        if len(lines) < 4:
            logger.warning(f"Skipping malformed git log record: {chunk[:80]!r}")
            continue

        commit_hash, author, timestamp, subject, *body_lines = lines
        body = "\n".join(body_lines).strip()
        try:
            committed_at = datetime.fromtimestamp(int(timestamp), tz=UTC)
        except ValueError:
            logger.warning(f"Skipping git log record with bad timestamp {timestamp!r}")
            continue

        commits.append(
            Commit(
                hash=commit_hash.strip(),
                author=author,
                date=committed_at,
                message=subject,
                summary=body or None,
                repository="",
            )
        )
    return commits


class GitReader:
    """Runs read-only git commands against a local repository path."""

    def __init__(self, git_executable: str = "git"):
        self.git_executable = git_executable

    async def _run(self, repo_path: str, *args: str) -> str:
        """Run `git -C <repo_path> <args>` and return its stdout.

        Raises:
            ProcessError: If git cannot be started or exits non-zero
        """
        command = [self.git_executable, "-C", repo_path, *args]
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ProcessError(
                f"Failed to start git: {e}",
                command=command,
            ) from e

        stdout, stderr = await process.communicate()
        error_output = stderr.decode(errors="replace").strip() if stderr else ""

        if process.returncode != 0:
            logger.error(f"git {args[0]} failed in {repo_path} ({process.returncode}): {error_output}")
            raise ProcessError(
                f"git {args[0]} failed with exit code {process.returncode}"
                + (f": {error_output}" if error_output else ""),
                command=command,
                returncode=process.returncode,
                stderr=error_output,
            )

        return stdout.decode(errors="replace")

    async def read_log(self, repo_path: str, max_count: int = 10) -> list[Commit]:
        """
        Read the most recent commits, newest first.

        Args:
            repo_path: Path to a local checkout
            max_count: Maximum number of commits to read

        Returns:
            Commits with hash, author, date, message and summary populated
        """
        output = await self._run(
            repo_path,
            "log",
            f"--pretty=format:{LOG_FORMAT}",
            "-n",
            str(max_count),
        )
        return parse_log_output(output)

    async def read_diff(self, repo_path: str, commit_hash: str) -> str:
        """Return the unified diff introduced by a single commit."""
        output = await self._run(repo_path, "show", "--pretty=format:", commit_hash)
        return output.strip()

    async def read_status(self, repo_path: str) -> str:
        """Return `git status` output for the working tree."""
        output = await self._run(repo_path, "status")
        return output.strip()
