from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from .constants import StampConstants
from .errors import InvalidReleaseType
from .vcs import CommitSource, count_commits_today

logger = logging.getLogger(__name__)


def normalize_release_type(release_type: Optional[str]) -> str:
    # Unknown channels degrade to dev here; the CLI rejects them earlier
    if release_type in StampConstants.RELEASE_TYPES:
        return release_type
    return StampConstants.DEFAULT_RELEASE_TYPE


def validate_release_type(release_type: str) -> str:
    if release_type not in StampConstants.RELEASE_TYPES:
        raise InvalidReleaseType(release_type, StampConstants.RELEASE_TYPES)
    return release_type


def _date_prefix(date: dt.date) -> str:
    return f"{date.year % 100:02d}.{date.month:02d}.{date.day:02d}"


def format_version(release_type: Optional[str], date: dt.date, count: int) -> str:
    """Format a build version, e.g. ``25.09.03-beta.3``."""
    return f"{_date_prefix(date)}-{normalize_release_type(release_type)}.{count}"


def fallback_version(date: Optional[dt.date] = None) -> str:
    """Last-resort version used when normal generation fails.

    The layout (``25.09.03.1-commit``) deliberately differs from the normal
    one so a degraded build is recognizable.
    """
    if date is None:
        date = dt.date.today()
    return f"{_date_prefix(date)}.1-commit"


def generate_build_version(
    release_type: Optional[str] = StampConstants.DEFAULT_RELEASE_TYPE,
    source: Optional[CommitSource] = None,
    today: Optional[dt.date] = None,
    logger: logging.Logger = logger,
) -> str:
    try:
        if today is None:
            today = dt.date.today()
        count = count_commits_today(source=source, today=today, logger=logger)
        return format_version(release_type, today, count)
    except Exception as e:
        # Generation must always produce something usable
        logger.error(f"Error generating build version: {e}")
        return fallback_version(today)


def display_version(version: str) -> str:
    """Return the short display form, ``v`` plus everything before the first ``-``."""
    return f"v{version}".split("-", 1)[0]
