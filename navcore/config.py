"""
Configuration manager for the navigation core.
"""

import copy
import json
import logging
import os
from typing import Any, Dict, Optional

from .exceptions import ConfigError
from .math.constants import (
    AVERAGE_SPEED_MS,
    DEFAULT_ROUTE_SEGMENTS,
    DEFAULT_FOV_ANGLE_DEG,
    DEFAULT_FOV_RADIUS_M,
)

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for the navigation core."""

    DEFAULT_CONFIG = {
        # Route tracking
        "navigation": {
            "average_speed_ms": AVERAGE_SPEED_MS,
            "route_segments": DEFAULT_ROUTE_SEGMENTS
        },

        # Compass; null disables heading smoothing
        "compass": {
            "smoothing_factor": None
        },

        # Location intake
        "location": {
            "history_length": 10,
            "stationary_speed_ms": 0.5
        },

        # Field of view
        "fov": {
            "angle_deg": DEFAULT_FOV_ANGLE_DEG,
            "radius_m": DEFAULT_FOV_RADIUS_M
        },

        # Logging
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "file": None
        }
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Optional path to a JSON configuration file; values
                found there override the defaults
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file is None:
            return

        # Load configuration from file if it exists
        if os.path.exists(config_file):
            self.load_config()
        else:
            logger.debug("Config file %s not found, using defaults", config_file)

    def load_config(self) -> None:
        """
        Load configuration from file.

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object
        """
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to load config {self.config_file}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigError(f"Config {self.config_file} must contain a JSON object")

        # Merge with defaults (file config overrides defaults)
        self._merge_config(self.config, file_config)
        logger.info("Configuration loaded from %s", self.config_file)

    def save_config(self, path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            path: Destination; defaults to the file the config was loaded from

        Raises:
            ConfigError: If no path is known or the file cannot be written
        """
        path = path or self.config_file
        if path is None:
            raise ConfigError("No config file path given")

        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save config {path}: {e}") from e

        logger.info("Configuration saved to %s", path)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default=None):
        """Get configuration value by dotted key with optional default."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """Set configuration value by dotted key."""
        keys = key.split('.')
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    # Property accessors for common configuration values
    @property
    def average_speed_ms(self) -> float:
        return float(self.config["navigation"]["average_speed_ms"])

    @property
    def route_segments(self) -> int:
        return int(self.config["navigation"]["route_segments"])

    @property
    def smoothing_factor(self) -> Optional[float]:
        value = self.config["compass"]["smoothing_factor"]
        return None if value is None else float(value)

    @property
    def location_history_length(self) -> int:
        return int(self.config["location"]["history_length"])

    @property
    def stationary_speed_ms(self) -> float:
        return float(self.config["location"]["stationary_speed_ms"])

    @property
    def fov_angle_deg(self) -> float:
        return float(self.config["fov"]["angle_deg"])

    @property
    def fov_radius_m(self) -> float:
        return float(self.config["fov"]["radius_m"])

    @property
    def log_level(self) -> str:
        return str(self.config["logging"]["level"]).upper()

    @property
    def log_format(self) -> str:
        return self.config["logging"]["format"]

    @property
    def log_file(self) -> Optional[str]:
        return self.config["logging"]["file"]


def configure_logging(config: Optional[Config] = None) -> None:
    """
    Configure the root logger from the logging section of a config.

    Call once from an application entry point; library modules only create
    their own named loggers.
    """
    config = config or Config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=config.log_format,
        datefmt="%H:%M:%S",
        filename=config.log_file
    )
