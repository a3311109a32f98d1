"""Constants and defaults for buildstamp."""

class StampConstants:
    """Central configuration constants for version generation."""

    # Tool identity (reported by --version)
    TOOL_NAME = "buildstamp"
    TOOL_VERSION = "1.0.0"
    TOOL_DESCRIPTION = "Date and commit-count based build versioning"

    # Release channels, in the order they are listed to users
    RELEASE_TYPES = ("dev", "beta", "release")
    DEFAULT_RELEASE_TYPE = "dev"

    # Commit counting
    FALLBACK_COMMIT_COUNT = 1  # Used when git is unavailable
    MIN_COMMIT_COUNT = 1  # Numbering starts at 1
    DAY_START = "00:00:00"
    DAY_END = "23:59:59"

    # Files, relative to the working directory
    MANIFEST_NAME = "package.json"
    BUILD_INFO_PATH = "src/version.ts"
    MANIFEST_INDENT = 2

    # File operations
    ATOMIC_WRITE_PREFIX = "."  # Prefix for temporary files
    ATOMIC_WRITE_SUFFIX = ".tmp"  # Suffix for temporary files
