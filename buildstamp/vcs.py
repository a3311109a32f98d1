"""Counting today's commits through git.

The git query sits behind the ``CommitSource`` interface so the counter can
be driven by a fake in tests. ``GitCommitSource`` is the only real
implementation.
"""

from __future__ import annotations

import datetime as dt
import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional

from .constants import StampConstants
from .errors import VcsUnavailable

logger = logging.getLogger(__name__)


class CommitSource(ABC):
    """Something that can list commits recorded within a time range."""

    @abstractmethod
    def query_commits_in_range(self, start: str, end: str) -> List[str]:
        """Return identifiers of commits made between start and end.

        Args:
            start: Lower bound, ``YYYY-MM-DD HH:MM:SS`` local time, inclusive.
            end: Upper bound, same format, inclusive.

        Raises:
            VcsUnavailable: If the history cannot be queried.
        """


class GitCommitSource(CommitSource):
    """Query the git repository containing a working directory."""

    def __init__(self, cwd: Optional[str] = None, executable: str = "git"):
        self.cwd = cwd
        self.executable = executable

    def query_commits_in_range(self, start: str, end: str) -> List[str]:
        git = shutil.which(self.executable)
        if git is None:
            raise VcsUnavailable(f"{self.executable} executable not found on PATH")

        try:
            result = subprocess.run(
                [git, "log", f"--since={start}", f"--until={end}", "--format=%H"],
                capture_output=True,
                text=True,
                errors="replace",
                cwd=self.cwd or os.getcwd(),
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise VcsUnavailable(str(e)) from e

        if result.returncode != 0:
            message = result.stderr.strip() or f"git exited with status {result.returncode}"
            raise VcsUnavailable(message)

        logger.debug(f"git log output: {result.stdout!r}")
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def count_commits_today(
    source: Optional[CommitSource] = None,
    today: Optional[dt.date] = None,
    logger: logging.Logger = logger,
) -> int:
    """Count the commits made today, never returning less than 1.

    Args:
        source: Where to look for commits. Defaults to git in the current
            working directory.
        today: The local calendar date to count. Defaults to today.
        logger: Where warnings about an unavailable git are reported.

    Returns:
        The number of commits made today, or 1 if there were none or the
        history could not be queried.
    """
    if source is None:
        source = GitCommitSource()
    if today is None:
        today = dt.date.today()

    day = today.strftime("%Y-%m-%d")
    try:
        commits = source.query_commits_in_range(
            f"{day} {StampConstants.DAY_START}",
            f"{day} {StampConstants.DAY_END}",
        )
        count = len(commits)
        if count:
            logger.info(f"Found {count} commit(s) for {day}")
        else:
            logger.info(f"No commits found for {day}")
    except VcsUnavailable as e:
        logger.warning(
            f"Could not get git commit count, using default value "
            f"{StampConstants.FALLBACK_COMMIT_COUNT}: {e}"
        )
        count = StampConstants.FALLBACK_COMMIT_COUNT

    return max(count, StampConstants.MIN_COMMIT_COUNT)
