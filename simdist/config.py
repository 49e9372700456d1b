"""
Configuration for simdist.

Values come from the built-in defaults, then an optional YAML/JSON file
found next to the input (or in one of its parents), then ``SIMDIST_*``
environment variables.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [".simdist.yml", ".simdist.yaml", "simdist.yml", "simdist.yaml"]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_optional_int(value: str) -> Optional[int]:
    value = value.strip()
    if value.lower() in ("", "none", "auto"):
        return None
    return int(value)


# env var -> (config key, parser)
ENVIRONMENT_OVERRIDES: Dict[str, tuple] = {
    "SIMDIST_PRECISION": ("analysis.precision", int),
    "SIMDIST_WORKERS": ("analysis.workers", _parse_optional_int),
    "SIMDIST_WIDTH": ("display.width", _parse_optional_int),
    "SIMDIST_SHOW_PROGRESS": ("output.show_progress", _parse_bool),
    "SIMDIST_LOG_LEVEL": ("logging.level", str.upper),
}


class Config:
    """Dot-key configuration store."""

    DEFAULT_CONFIG = {
        "analysis": {
            "precision": 3,
            "workers": None  # None = logical CPU count
        },
        "display": {
            "width": None,  # None = detect terminal width
            "fallback_width": 100,
            "fill_char": "x",
            "height_ratio": 30
        },
        "output": {
            "show_progress": True
        },
        "logging": {
            "level": "WARNING",
            "file": False,
            "json": False,
            "log_dir": None
        }
    }

    def __init__(self, config_dict: Optional[Dict] = None):
        """Initialize with optional config dictionary."""
        self.config = self._merge_configs(copy.deepcopy(self.DEFAULT_CONFIG), config_dict or {})
        self.source: Optional[Path] = None

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Config":
        """Load configuration from a file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path, "r") as f:
            try:
                if path.suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f) or {}
                elif path.suffix == ".json":
                    data = json.load(f)
                else:
                    raise ConfigError(f"Unsupported config format: {path.suffix}")
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise ConfigError(f"Could not parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        config = cls(data)
        config.source = path
        logger.debug(f"Loaded configuration from {path}")
        return config

    @classmethod
    def find_and_load(cls, start_path: Path) -> "Config":
        """Find and load configuration from standard locations."""
        current = Path(start_path).resolve()
        if current.is_file():
            current = current.parent

        while True:
            for name in CONFIG_FILE_NAMES:
                config_path = current / name
                if config_path.exists():
                    return cls.from_file(config_path)
            if current == current.parent:
                break
            current = current.parent

        return cls()

    def get(self, key: str, default=None):
        """Get configuration value by dot-separated key."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value):
        """Set configuration value by dot-separated key."""
        keys = key.split(".")
        config = self.config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def apply_environment_overrides(self, environ: Optional[Dict[str, str]] = None) -> "Config":
        """Apply ``SIMDIST_*`` environment variables on top of the current values."""
        environ = os.environ if environ is None else environ

        for env_var, (key, parse) in ENVIRONMENT_OVERRIDES.items():
            raw = environ.get(env_var)
            if raw is None:
                continue
            try:
                self.set(key, parse(raw))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_var}: {raw!r}", key=key) from e
            logger.debug(f"Applied {env_var} override to {key}")

        return self

    def validate(self) -> None:
        """Raise ``ConfigError`` on the first invalid value."""
        precision = self.get("analysis.precision")
        if not _is_int(precision) or not 0 <= precision <= 9:
            raise ConfigError(f"analysis.precision must be an integer between 0 and 9, got {precision!r}",
                              key="analysis.precision")

        self._check_optional_positive("analysis.workers")
        self._check_optional_positive("display.width")
        self._check_positive("display.fallback_width")
        self._check_positive("display.height_ratio")

        fill_char = self.get("display.fill_char")
        if not isinstance(fill_char, str) or len(fill_char) != 1:
            raise ConfigError(f"display.fill_char must be a single character, got {fill_char!r}",
                              key="display.fill_char")

        level = self.get("logging.level")
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}",
                              key="logging.level")

    def _check_positive(self, key: str) -> None:
        value = self.get(key)
        if not _is_int(value) or value < 1:
            raise ConfigError(f"{key} must be a positive integer, got {value!r}", key=key)

    def _check_optional_positive(self, key: str) -> None:
        if self.get(key) is not None:
            self._check_positive(key)

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return copy.deepcopy(self.config)

    def _merge_configs(self, base: Dict, override: Dict) -> Dict:
        """Recursively merge configuration dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_config(input_path: Path, environ: Optional[Dict[str, str]] = None) -> Config:
    """Discover, override and validate the configuration for an input file."""
    config = Config.find_and_load(input_path if input_path.exists() else Path.cwd())
    config.apply_environment_overrides(environ)
    config.validate()
    return config
