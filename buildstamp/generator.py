"""Run a full version generation: count, format, then write both files."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from .build_info import write_build_info
from .constants import StampConstants
from .manifest import update_manifest
from .result import GenerationResult
from .vcs import CommitSource, GitCommitSource
from .version import generate_build_version

logger = logging.getLogger(__name__)


def generate(
    release_type: str = StampConstants.DEFAULT_RELEASE_TYPE,
    cwd: Optional[str] = None,
    manifest: str = StampConstants.MANIFEST_NAME,
    output: str = StampConstants.BUILD_INFO_PATH,
    dry_run: bool = False,
    source: Optional[CommitSource] = None,
    today: Optional[dt.date] = None,
    now: Optional[dt.datetime] = None,
    logger: logging.Logger = logger,
) -> GenerationResult:
    """Generate a build version and stamp it into the project.

    The manifest update and the build-info write are independent: a failed
    manifest update does not stop the build-info file from being written.

    Args:
        release_type: ``dev``, ``beta`` or ``release``.
        cwd: Project directory. Defaults to the working directory.
        manifest: Manifest file name inside cwd.
        output: Build-info file path relative to cwd.
        dry_run: Only compute the version; write nothing.
        source: Commit source. Defaults to git in cwd.
        today: Date used for the version. Defaults to today.
        now: Build instant recorded in the build-info file.
        logger: Where progress and failures are reported.

    Returns:
        The version together with the outcome of each write step.
    """
    if source is None:
        source = GitCommitSource(cwd)

    version = generate_build_version(release_type, source=source, today=today, logger=logger)
    logger.info(f"Generated version: {version}")

    if dry_run:
        return GenerationResult(version=version)

    manifest_result = update_manifest(version, cwd=cwd, filename=manifest, logger=logger)
    build_info_result = write_build_info(version, path=output, cwd=cwd, now=now, logger=logger)

    return GenerationResult(
        version=version,
        manifest=manifest_result,
        build_info=build_info_result,
    )
