"""Error types raised and reported by buildstamp components.

Most of these never escape a component: they are caught at the component
boundary, logged, and handed back inside a ``StepResult`` so callers can
tell a missing manifest from a failed write without parsing log output.
"""

from __future__ import annotations


class BuildstampError(Exception):
    """Base class for all buildstamp errors."""


class VcsUnavailable(BuildstampError):
    """The version-control query could not be executed."""


class ManifestError(BuildstampError):
    """The manifest could not be used."""


class ManifestMissing(ManifestError):
    """No manifest file exists at the expected path."""


class ManifestParseError(ManifestError):
    """The manifest is unreadable, not JSON, or not a JSON object."""


class FileWriteError(BuildstampError):
    """A generated file could not be written."""


class InvalidReleaseType(BuildstampError):
    """A release type outside the recognized set was requested."""

    def __init__(self, value: str, valid: tuple[str, ...]):
        self.value = value
        self.valid = valid
        super().__init__(
            f'Invalid version type "{value}". Valid types are: {", ".join(valid)}'
        )
