"""Generating the build-info source file.

The file exposes the build version, the build instant (ISO string and
epoch milliseconds), an aggregate of the three, and two helpers to
application code. TypeScript is the default output; JavaScript and Python
are chosen by the destination suffix.
"""

from __future__ import annotations

import datetime as dt
import logging
import os
from pathlib import Path
from typing import Callable, Dict, NamedTuple, Optional

from .atomic import write_text_atomic
from .constants import StampConstants
from .errors import FileWriteError
from .result import StepResult

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


class BuildInfo(NamedTuple):
    version: str
    date: str
    timestamp: int

    @classmethod
    def at(cls, version: str, now: dt.datetime) -> BuildInfo:
        """Build the record from a single sampled instant."""
        now = now.astimezone(dt.timezone.utc)
        date = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        timestamp = (now - _EPOCH) // dt.timedelta(milliseconds=1)
        return cls(version=version, date=date, timestamp=timestamp)


def _js_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_typescript(info: BuildInfo) -> str:
    return f"""// Auto-generated version file
// Do not edit manually - this file is updated by {StampConstants.TOOL_NAME}

export const BUILD_VERSION = {_js_string(info.version)};
export const BUILD_DATE = {_js_string(info.date)};
export const BUILD_TIMESTAMP = {info.timestamp};
export const BUILD_INFO = {{
  version: BUILD_VERSION,
  date: BUILD_DATE,
  timestamp: BUILD_TIMESTAMP,
}};

// Helper function to get readable build date
export const getBuildDateString = (): string => {{
  return new Date(BUILD_TIMESTAMP).toLocaleDateString();
}};

// Helper function to get version display string
export const getVersionDisplayString = (): string => {{
  return `v${{BUILD_VERSION}}`.split('-')[0];
}};
"""


def render_javascript(info: BuildInfo) -> str:
    return f"""// Auto-generated version file
// Do not edit manually - this file is updated by {StampConstants.TOOL_NAME}

export const BUILD_VERSION = {_js_string(info.version)};
export const BUILD_DATE = {_js_string(info.date)};
export const BUILD_TIMESTAMP = {info.timestamp};
export const BUILD_INFO = {{
  version: BUILD_VERSION,
  date: BUILD_DATE,
  timestamp: BUILD_TIMESTAMP,
}};

// Helper function to get readable build date
export const getBuildDateString = () => {{
  return new Date(BUILD_TIMESTAMP).toLocaleDateString();
}};

// Helper function to get version display string
export const getVersionDisplayString = () => {{
  return `v${{BUILD_VERSION}}`.split('-')[0];
}};
"""


def render_python(info: BuildInfo) -> str:
    return f'''# Auto-generated version file.
# Do not edit manually - this file is updated by {StampConstants.TOOL_NAME}.
import datetime

BUILD_VERSION = {info.version!r}
BUILD_DATE = {info.date!r}
BUILD_TIMESTAMP = {info.timestamp}
BUILD_INFO = {{
    "version": BUILD_VERSION,
    "date": BUILD_DATE,
    "timestamp": BUILD_TIMESTAMP,
}}


def get_build_date_string() -> str:
    """Return the build date in the current locale's format."""
    return datetime.datetime.fromtimestamp(BUILD_TIMESTAMP / 1000).strftime("%x")


def get_version_display_string() -> str:
    """Return the version without its channel suffix, e.g. v25.09.03."""
    return f"v{{BUILD_VERSION}}".split("-", 1)[0]
'''


_RENDERERS: Dict[str, Callable[[BuildInfo], str]] = {
    ".ts": render_typescript,
    ".js": render_javascript,
    ".py": render_python,
}


def render_build_info(info: BuildInfo, suffix: str = ".ts") -> str:
    """Render the build-info source for a file suffix.

    Raises:
        ValueError: If no renderer exists for the suffix.
    """
    try:
        renderer = _RENDERERS[suffix.lower()]
    except KeyError:
        supported = ", ".join(sorted(_RENDERERS))
        raise ValueError(f"Unsupported build info file type '{suffix}' (supported: {supported})") from None
    return renderer(info)


def write_build_info(
    version: str,
    path: Optional[str] = None,
    cwd: Optional[str] = None,
    now: Optional[dt.datetime] = None,
    logger: logging.Logger = logger,
) -> StepResult:
    """Create or overwrite the build-info file.

    Args:
        version: The version string to embed.
        path: Destination, relative to cwd unless absolute.
            Defaults to ``src/version.ts``.
        cwd: Base directory. Defaults to the working directory.
        now: The build instant. Sampled from the clock when omitted.
        logger: Where failures are reported.

    Returns:
        A StepResult, truthy if the file was written.
    """
    target = Path(cwd or os.getcwd()) / (path or StampConstants.BUILD_INFO_PATH)
    info = BuildInfo.at(version, now or dt.datetime.now(dt.timezone.utc))

    try:
        content = render_build_info(info, target.suffix)
    except ValueError as e:
        error = FileWriteError(str(e))
        logger.error(f"Error creating version file: {error}")
        return StepResult.failure(str(target), error)

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        write_text_atomic(str(target), content)
    except OSError as e:
        error = FileWriteError(f"Could not write {target}: {e}")
        logger.error(f"Error creating version file: {error}")
        return StepResult.failure(str(target), error)

    logger.info(f"Created/updated version file: {target}")
    return StepResult.success(str(target))
