"""
Configuration Module for the I2E invoice processor.

Extraction tunables, input/output options and logging are read from a
YAML settings file instead of being hard-coded at the call sites. The
default file is config/settings.yaml next to this module.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from i2e.utils.exceptions import ConfigurationError

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"


class ConfigurationManager:
    """
    Process-wide settings store.

    One instance exists per process. Constructing it again with no path
    returns the loaded instance untouched; passing a different path
    switches to that file.

    Attributes:
        config_path (Path): Settings file currently loaded.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("extraction.totals.amount_window")
        50
        >>> config.get("extraction.service_period.unknown")
        'Unknown Period'
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load the settings file on first use or when a new path is given.

        Args:
            config_path: Settings file. Defaults to config/settings.yaml.

        Raises:
            ConfigurationError: If the file is missing or invalid.
        """
        requested = Path(config_path) if config_path else None

        if self._initialized and (requested is None or requested == self.config_path):
            return

        path = requested or DEFAULT_SETTINGS_PATH
        settings = self._read_settings(path)

        # commit only after a successful read
        self.config_path = path
        self._config = settings
        self._initialized = True

    @staticmethod
    def _read_settings(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigurationError(str(path), "Configuration file not found")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(str(path), str(e)) from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(str(path), "Top level must be a mapping")

        # relative paths.* entries are resolved against the project root
        project_root = Path(__file__).parent.parent
        for key, value in (loaded.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                loaded['paths'][key] = str(project_root / value)

        return loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted key.

        Example:
            >>> config.get("extraction.totals.lookahead_lines")
            2
            >>> config.get("extraction.nonexistent", 0)
            0
        """
        value = self._config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def get_all(self) -> Dict[str, Any]:
        """Shallow copy of the loaded settings."""
        return self._config.copy()

    def reload(self) -> None:
        """Re-read the current settings file; on error the loaded settings stay."""
        self._config = self._read_settings(self.config_path)

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded instance; the next construction loads again."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'DEFAULT_SETTINGS_PATH']
