"""buildstamp - Date and commit-count based build versioning."""

from .build_info import BuildInfo, write_build_info
from .generator import generate
from .manifest import update_manifest
from .result import GenerationResult, StepResult
from .vcs import CommitSource, GitCommitSource, count_commits_today
from .version import display_version, format_version, generate_build_version

__all__ = [
    'BuildInfo',
    'CommitSource',
    'GenerationResult',
    'GitCommitSource',
    'StepResult',
    'count_commits_today',
    'display_version',
    'format_version',
    'generate',
    'generate_build_version',
    'update_manifest',
    'write_build_info',
]
