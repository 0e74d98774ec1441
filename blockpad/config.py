"""
Configuration management for Blockpad.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to manage storage, editor and logging settings
without changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Blockpad.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "database": {
                "filename": "blockpad.db"
            },
            "paths": {
                "log_file": "blockpad.log",
                "export_dir": "export"
            },
            "editor": {
                "id_length": 12,
                "callout_icon": "💡",
                "callout_color": "#fef9c3"
            },
            "previews": {
                "snippet_length": 120
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "editor.id_length")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("database.filename")  # Returns "blockpad.db"
            config.get("editor.callout_icon")  # Returns "💡"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("database.filename", "blockpad.db")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "blockpad.log")

    @property
    def export_directory(self) -> str:
        """Get markdown export directory."""
        return self.get("paths.export_dir", "export")

    @property
    def id_length(self) -> int:
        """Get the length of generated block and page ids."""
        return int(self.get("editor.id_length", 12))

    @property
    def callout_icon(self) -> str:
        """Get the icon given to new callout blocks."""
        return self.get("editor.callout_icon", "💡")

    @property
    def callout_color(self) -> str:
        """Get the background color given to new callout blocks."""
        return self.get("editor.callout_color", "#fef9c3")

    @property
    def snippet_length(self) -> int:
        """Get the maximum length of page preview snippets."""
        return int(self.get("previews.snippet_length", 120))


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
