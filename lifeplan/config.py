"""
Configuration management for lifeplan.

This module handles loading and accessing configuration values from config.yaml.
Missing or unreadable files fall back to the built-in defaults.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import logging


class ConfigManager:
    """
    Manages configuration loading and access for lifeplan.
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
        if not self.config_path.exists():
            logging.debug(f"Configuration file not found: {self.config_path}, using defaults")
            self._config = self._get_default_config()
            return

        try:
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
            "planner": {
                "base_year": None,
                "start_level": "WEEK",
                "upcoming_event_days": 30
            },
            "database": {
                "filename": "lifeplan.db"
            },
            "paths": {
                "log_file": "lifeplan.log"
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
            key_path: Dot-separated path to the configuration value (e.g., "planner.base_year")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("database.filename")  # Returns "lifeplan.db"
            config.get("planner.upcoming_event_days")  # Returns 30
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
    def base_year(self) -> Optional[int]:
        """Get the configured base year, None meaning the current year."""
        value = self.get("planner.base_year")
        return int(value) if value is not None else None

    @property
    def start_level(self) -> str:
        """Get the level the driver opens at."""
        return str(self.get("planner.start_level", "WEEK")).upper()

    @property
    def upcoming_event_days(self) -> int:
        """Get the look-ahead window for annual events."""
        return self.get("planner.upcoming_event_days", 30)

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("database.filename", "lifeplan.db")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "lifeplan.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
