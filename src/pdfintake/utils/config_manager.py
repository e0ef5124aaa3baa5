"""
PdfIntake - Configuration Manager

This module provides centralized JSON-based configuration management.
It handles loading, saving and upgrading the settings file.
"""

import copy
import json
import os
from typing import Any, Final

from pdfintake.config import (
    CONFIG_FILE_PATH,
    DEFAULT_ACCEPTED_MIME_TYPE,
    DEFAULT_TYPE_LABEL,
)
from pdfintake.utils.logger import logger

# Default configuration values
DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "version": 1,
    "intake": {
        "accepted_mime_type": DEFAULT_ACCEPTED_MIME_TYPE,
        "type_label": DEFAULT_TYPE_LABEL,
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigManager:
    """Manages application configuration in JSON format.

    Values are addressed by dot-separated paths such as
    ``"intake.accepted_mime_type"``.
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to the configuration file.
                        Defaults to CONFIG_FILE_PATH.
        """
        self.config_path = config_path or CONFIG_FILE_PATH
        self._config: dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file or fall back to defaults."""
        if not os.path.exists(self.config_path):
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration loaded from JSON")
            self._upgrade_config()
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config: {e}")
            self._config = self._get_default_config()

    def _get_default_config(self) -> dict[str, Any]:
        """Get a deep copy of the default configuration."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def _upgrade_config(self) -> None:
        """Upgrade configuration to latest version if needed."""
        current_version = self._config.get("version", 0)

        if current_version < DEFAULT_CONFIG["version"]:
            self._merge_defaults(self._config, DEFAULT_CONFIG)
            self._config["version"] = DEFAULT_CONFIG["version"]
            logger.info(f"Configuration upgraded to version {DEFAULT_CONFIG['version']}")

    def _merge_defaults(self, config: dict, defaults: dict) -> None:
        """Merge default values into config for missing keys.

        Args:
            config: Current configuration dictionary.
            defaults: Default configuration dictionary.
        """
        for key, value in defaults.items():
            if key not in config:
                config[key] = copy.deepcopy(value)
            elif isinstance(value, dict) and isinstance(config.get(key), dict):
                self._merge_defaults(config[key], value)

    def save(self) -> bool:
        """Save configuration to file.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            os.makedirs(os.path.dirname(self.config_path) or ".", exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
            logger.debug("Configuration saved to JSON")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path.

        Falls back to the built-in default when the path is missing from
        the loaded file, and to ``default`` when neither has it.
        """
        for source in (self._config, DEFAULT_CONFIG):
            value: Any = source
            for key in key_path.split("."):
                if isinstance(value, dict) and key in value:
                    value = value[key]
                else:
                    break
            else:
                return value
        return default

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value
            value: Value to set
            save_immediately: Whether to save to file immediately
        """
        keys = key_path.split(".")
        config = self._config

        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

        if save_immediately:
            self.save()


# Singleton instance for global access
_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
