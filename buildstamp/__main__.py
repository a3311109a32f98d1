"""buildstamp CLI entry point.

Allows running via `python -m buildstamp` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from .cli import Console
from .errors import InvalidReleaseType
from .generator import generate
from .settings import Settings, SettingsKeys, get_settings, parse_setting_value
from .version import validate_release_type

HELP_FLAGS = ("--help", "-h")
VERSION_FLAGS = ("--version", "-v")
DRY_RUN_FLAG = "--dry-run"
SET_FLAG = "--set"


def _apply_settings(console: Console, store: Settings, assignments: List[str]) -> int:
    """Store ``KEY=VALUE`` assignments given with --set."""
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        key = key.strip()
        if not sep or not key:
            console.setting_error(f'Expected KEY=VALUE, got "{assignment}"')
            return 1
        if not store.update(key, parse_setting_value(key, raw)):
            console.setting_error(f'Could not save setting "{key}" = "{raw}"')
            return 1
        console.setting_saved(key, raw, str(store.path))
    return 0


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    # Very small arg parsing: flags may appear anywhere, first positional is the type
    args = sys.argv[1:] if argv is None else list(argv)
    store = settings or get_settings()
    config = store.load()
    console = Console(color=config[SettingsKeys.COLOR])

    if any(a in HELP_FLAGS for a in args):
        console.show_help()
        return 0
    if any(a in VERSION_FLAGS for a in args):
        console.show_version()
        return 0

    positionals = []
    assignments = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == SET_FLAG:
            if i + 1 >= len(args):
                console.setting_error("--set needs a KEY=VALUE argument")
                return 1
            assignments.append(args[i + 1])
            i += 2
            continue
        if arg.startswith("-") and arg != DRY_RUN_FLAG:
            console.unknown_option(arg)
            return 1
        if not arg.startswith("-"):
            positionals.append(arg)
        i += 1

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if assignments:
        return _apply_settings(console, store, assignments)

    release_type = positionals[0] if positionals else config[SettingsKeys.DEFAULT_TYPE]
    try:
        validate_release_type(release_type)
    except InvalidReleaseType as e:
        console.invalid_type(e)
        return 1

    try:
        console.start(release_type)
        result = generate(
            release_type,
            manifest=config[SettingsKeys.MANIFEST],
            output=config[SettingsKeys.OUTPUT],
            dry_run=DRY_RUN_FLAG in args,
        )
        console.report(result)
    except Exception as e:
        console.crash(e)
        return 1

    if not result.ok:
        return 1
    console.emit_version(result.version)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
