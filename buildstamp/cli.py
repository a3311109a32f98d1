"""Console output for the command-line front end.

Progress goes to stderr so stdout carries nothing but the generated
version, which calling scripts capture.
"""

from __future__ import annotations

import sys
import traceback
from typing import Optional, TextIO

import blessed

from .constants import StampConstants
from .errors import InvalidReleaseType
from .result import GenerationResult, StepResult

USAGE = f"{StampConstants.TOOL_NAME} [version-type] [--dry-run] [--set KEY=VALUE]"

RELEASE_TYPE_HELP = {
    "dev": "Development version (default)",
    "beta": "Beta release version",
    "release": "Production release version",
}


class Console:
    """Writes help, progress and errors, colored when the stream is a terminal."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None, color: bool = True):
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        # force_styling=None disables styling; False styles only real terminals
        styling = False if color else None
        self.term = blessed.Terminal(stream=self.err, force_styling=styling)
        self.out_term = blessed.Terminal(stream=self.out, force_styling=styling)

    def _print(self, *parts: str) -> None:
        print(*parts, file=self.err)

    def show_help(self) -> None:
        t = self.out_term
        name = StampConstants.TOOL_NAME
        lines = [
            t.cyan(f"{name} CLI Tool"),
            t.cyan("=" * (len(name) + 9)),
            "",
            "A command-line interface for generating build version numbers",
            "",
            t.yellow("Usage:"),
            f"  {USAGE}",
            "",
            t.yellow("Version Types:"),
        ]
        for release_type in StampConstants.RELEASE_TYPES:
            lines.append(f"  {release_type:<8} - {RELEASE_TYPE_HELP[release_type]}")
        lines += [
            "",
            t.yellow("Examples:"),
            f"  {name}          # Generates dev version",
            f"  {name} beta     # Generates beta version",
            f"  {name} release  # Generates release version",
            "",
            t.yellow("Options:"),
            "  --dry-run        Print the version without writing any files",
            "  --set KEY=VALUE  Save a setting (default_type, manifest, output, color)",
            "  --help, -h       Show this help message",
            "  --version, -v    Show version information",
        ]
        print("\n".join(lines), file=self.out)

    def show_version(self) -> None:
        print(self.out_term.cyan(f"{StampConstants.TOOL_NAME} CLI"), file=self.out)
        print(f"Version: {StampConstants.TOOL_VERSION}", file=self.out)
        print(StampConstants.TOOL_DESCRIPTION, file=self.out)

    def invalid_type(self, error: InvalidReleaseType) -> None:
        self._print(self.term.red("Error:"), f'Invalid version type "{error.value}"')
        self._print(f"Valid types are: {', '.join(error.valid)}")
        self._print("Use --help for more information")

    def unknown_option(self, option: str) -> None:
        self._print(self.term.red("Error:"), f'Unknown option "{option}"')
        self._print("Use --help for more information")

    def setting_error(self, message: str) -> None:
        self._print(self.term.red("Error:"), message)
        self._print("Use --help for more information")

    def setting_saved(self, key: str, value: str, path: str) -> None:
        self._print(self.term.green("Saved setting:"), f"{key} = {value}", f"({path})")

    def start(self, release_type: str) -> None:
        t = self.term
        self._print(t.cyan(f"{StampConstants.TOOL_NAME} CLI"))
        self._print(t.cyan("=" * (len(StampConstants.TOOL_NAME) + 4)))
        self._print("")
        self._print(t.yellow("Generating version..."))
        self._print(f"Version type: {t.magenta(release_type)}")
        self._print("")

    def _step(self, result: StepResult, done: str, failed: str) -> None:
        if result:
            self._print(self.term.green(done))
        else:
            self._print(self.term.red(failed), f"({result.error})")

    def report(self, result: GenerationResult) -> None:
        t = self.term
        self._print(t.green("Version generated:"), t.bold(result.version))

        if result.manifest is not None:
            self._step(
                result.manifest,
                f"{result.manifest.path} updated successfully",
                "Manifest not found or failed to update",
            )
        if result.build_info is not None:
            self._step(
                result.build_info,
                f"{result.build_info.path} created/updated successfully",
                "Failed to create version file",
            )

        self._print("")
        if result.ok:
            self._print(t.green("Version generation completed!"))
        else:
            self._print(t.red("Version generation failed!"))
        self._print(t.cyan("Final version:"), t.bold(result.version))

    def emit_version(self, version: str) -> None:
        """Write the bare version to stdout for calling scripts."""
        self.out.write(version + "\n")
        self.out.flush()

    def crash(self, error: BaseException) -> None:
        self._print("")
        self._print(self.term.red("Error:"), str(error))
        self._print("")
        self._print(self.term.red("Stack trace:"))
        self._print(traceback.format_exc().rstrip())
