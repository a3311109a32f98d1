"""Per-user settings for buildstamp.

Settings live in a JSON file in the user's config directory and change the
defaults the command line uses: the release type when none is given, the
manifest and build-info file locations, and whether output is colored.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .atomic import write_text_atomic
from .constants import StampConstants

logger = logging.getLogger(__name__)


class SettingsKeys:
    """Setting names recognized in settings.json."""

    DEFAULT_TYPE = "default_type"
    MANIFEST = "manifest"
    OUTPUT = "output"
    COLOR = "color"


DEFAULTS: Dict[str, Any] = {
    SettingsKeys.DEFAULT_TYPE: StampConstants.DEFAULT_RELEASE_TYPE,
    SettingsKeys.MANIFEST: StampConstants.MANIFEST_NAME,
    SettingsKeys.OUTPUT: StampConstants.BUILD_INFO_PATH,
    SettingsKeys.COLOR: True,
}


class Settings:
    """Loads, validates and saves the user's settings file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(
            platformdirs.user_config_dir(StampConstants.TOOL_NAME, StampConstants.TOOL_NAME)
        )
        self._settings_file = self._config_dir / "settings.json"
        self._cache: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._settings_file

    def _load_file(self) -> Dict[str, Any]:
        """Read the settings file.

        Returns:
            The stored settings, or an empty dict if the file is missing or
            can't be read.
        """
        if not self._settings_file.exists():
            return {}

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Dict[str, Any]:
        """Return the effective settings: defaults overlaid with valid stored values."""
        if self._cache is not None:
            return dict(self._cache)

        settings = dict(DEFAULTS)
        for key, value in self._load_file().items():
            if key not in DEFAULTS:
                continue
            if self.validate_setting(key, value):
                settings[key] = value
            else:
                logger.warning(f"Ignoring invalid value for setting '{key}': {value!r}")

        self._cache = settings
        return dict(settings)

    def get(self, key: str) -> Any:
        return self.load().get(key, DEFAULTS.get(key))

    def save(self, settings: Dict[str, Any]) -> bool:
        """Validate and store settings.

        Args:
            settings: Settings to store. Unknown keys are dropped.

        Returns:
            True if every value was valid and the file was written.
        """
        invalid = [k for k, v in settings.items() if k in DEFAULTS and not self.validate_setting(k, v)]
        if invalid:
            logger.warning(f"Not saving invalid settings: {', '.join(invalid)}")
            return False

        data = {k: v for k, v in settings.items() if k in DEFAULTS}
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            write_text_atomic(str(self._settings_file), json.dumps(data, indent=2) + "\n")
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            return False

        self._cache = None
        return True

    def update(self, key: str, value: Any) -> bool:
        """Store one setting, keeping the other stored values.

        Args:
            key: A known setting name.
            value: Its new value.

        Returns:
            True if the setting was valid and saved.
        """
        if key not in DEFAULTS:
            logger.warning(f"Unknown setting '{key}'")
            return False

        stored = {k: v for k, v in self._load_file().items() if k in DEFAULTS and self.validate_setting(k, v)}
        stored[key] = value
        return self.save(stored)

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        """Check a single setting value.

        Args:
            key: Setting name.
            value: Value to check.

        Returns:
            True if the value is acceptable for the key. Unknown keys are
            accepted.
        """
        if key == SettingsKeys.DEFAULT_TYPE:
            return value in StampConstants.RELEASE_TYPES

        if key in (SettingsKeys.MANIFEST, SettingsKeys.OUTPUT):
            return isinstance(value, str) and bool(value.strip())

        if key == SettingsKeys.COLOR:
            return isinstance(value, bool)

        return True


def parse_setting_value(key: str, raw: str) -> Any:
    """Convert a command-line string to the type a setting expects."""
    if key == SettingsKeys.COLOR:
        lowered = raw.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    return raw


# Global instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
