"""User configuration management."""

import logging
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "find": {
        "silent": False,
        "debug": False,
        "export_format": "csv",
    },
    "general": {
        "verbose": False,
    },
}

EXAMPLE_CONFIG = """# dupetree configuration file
# Location: ~/.config/dupetree/config.toml

[find]
# Suppress the per-file lines printed while deleting duplicates
silent = false

# Report which target file would be kept instead of deleting anything
debug = false

# Default export format for --export: "csv" or "json"
export_format = "csv"

[general]
# Show debug logging on stderr
verbose = false
"""


class Config:
    """User configuration manager."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize config with defaults."""
        self.config_dir = config_dir or Path.home() / ".config" / "dupetree"
        self.config_file = self.config_dir / "config.toml"
        self._user_config: dict[str, Any] = {}
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load config from file or return defaults."""
        if not self.config_file.exists():
            return DEFAULTS

        try:
            with open(self.config_file, "rb") as f:
                self._user_config = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", self.config_file, e)
            return DEFAULTS

        return self._merge_configs(DEFAULTS, self._user_config)

    def _merge_configs(self, defaults: dict, user: dict) -> dict:
        """Recursively merge user config into defaults."""
        result = defaults.copy()
        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a config value."""
        return self._config.get(section, {}).get(key, default)

    def settings(self) -> Iterator[tuple[str, str, Any, bool]]:
        """Yield (section, key, value, from_file) for every effective setting."""
        for section, values in self._config.items():
            if not isinstance(values, dict):
                continue
            user_section = self._user_config.get(section, {})
            for key, value in values.items():
                yield section, key, value, isinstance(user_section, dict) and key in user_section

    def create_example_config(self) -> None:
        """Create an example config file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file.write_text(EXAMPLE_CONFIG)


# Global config instance
_config = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached instance so the next get_config() re-reads the file."""
    global _config
    _config = None
