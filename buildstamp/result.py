"""Outcome records for the generation steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import BuildstampError


@dataclass(frozen=True)
class StepResult:
    """Outcome of one write step.

    Truthy exactly when the step succeeded, so it can stand in for a plain
    success flag.
    """

    ok: bool
    path: str
    error: Optional[BuildstampError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, path: str) -> StepResult:
        return cls(ok=True, path=path)

    @classmethod
    def failure(cls, path: str, error: BuildstampError) -> StepResult:
        return cls(ok=False, path=path, error=error)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a full generation run."""

    version: str
    manifest: Optional[StepResult] = None
    build_info: Optional[StepResult] = None

    @property
    def ok(self) -> bool:
        # Steps that were not run (dry run) don't count as failures
        steps = [s for s in (self.manifest, self.build_info) if s is not None]
        return all(steps)
