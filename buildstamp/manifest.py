"""Updating the version field of a package.json manifest."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from .atomic import write_text_atomic
from .constants import StampConstants
from .errors import FileWriteError, ManifestMissing, ManifestParseError
from .result import StepResult

logger = logging.getLogger(__name__)


def manifest_path(cwd: Optional[str] = None, filename: str = StampConstants.MANIFEST_NAME) -> str:
    """Return the manifest location for a working directory."""
    return os.path.join(cwd or os.getcwd(), filename)


def load_manifest(path: str) -> Dict[str, Any]:
    """Read and parse a manifest.

    Args:
        path: Path to the manifest file.

    Returns:
        The parsed JSON object, with key order preserved.

    Raises:
        ManifestMissing: If the file does not exist.
        ManifestParseError: If the file is unreadable, not JSON, or not an object.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestMissing(f"{path} not found") from e
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise ManifestParseError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestParseError(f"{path} does not contain a JSON object")
    return data


def render_manifest(data: Dict[str, Any]) -> str:
    """Serialize a manifest with 2-space indentation and a trailing newline."""
    return json.dumps(data, indent=StampConstants.MANIFEST_INDENT, ensure_ascii=False) + "\n"


def update_manifest(
    version: str,
    cwd: Optional[str] = None,
    filename: str = StampConstants.MANIFEST_NAME,
    logger: logging.Logger = logger,
) -> StepResult:
    """Set the top-level ``version`` field of the manifest.

    Failures are logged and returned, never raised.

    Args:
        version: The version string to store.
        cwd: Directory holding the manifest. Defaults to the working directory.
        filename: Manifest file name.
        logger: Where failures are reported.

    Returns:
        A StepResult, truthy if the manifest was rewritten.
    """
    path = manifest_path(cwd, filename)

    try:
        data = load_manifest(path)
    except (ManifestMissing, ManifestParseError) as e:
        logger.warning(f"Error updating {filename}: {e}")
        return StepResult.failure(path, e)

    data["version"] = version

    try:
        write_text_atomic(path, render_manifest(data))
    except OSError as e:
        error = FileWriteError(f"Could not write {path}: {e}")
        logger.error(f"Error updating {filename}: {error}")
        return StepResult.failure(path, error)

    logger.info(f"Updated {filename} version to: {version}")
    return StepResult.success(path)
