"""
Configuration

Loads anneal settings from a YAML file. Every key is optional; a missing
file yields the defaults.

Example config.yaml:

    version_threshold: minor
    triggers_dir: /etc/anneal/triggers
    packages_dir: /etc/anneal/packages
    command_timeout: 60
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .threshold import Threshold

logger = logging.getLogger(__name__)

CONFIG_PATH = "/etc/anneal/config.yaml"
CONFIG_ENV_VAR = "ANNEAL_CONFIG"

TRIGGERS_DIR = "/etc/anneal/triggers"
PACKAGES_DIR = "/etc/anneal/packages"


def get_config_path() -> Path:
    """Return the config path, honouring the ANNEAL_CONFIG variable."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or CONFIG_PATH)


@dataclass
class Config:
    """
    Anneal configuration.

    Attributes:
        version_threshold: Default threshold for user-defined triggers
        triggers_dir: Directory of per-trigger override files
        packages_dir: Directory of per-package override files
        command_timeout: Seconds to wait for pacman/pactree queries
    """

    version_threshold: Threshold = Threshold.MINOR
    triggers_dir: Path = field(default_factory=lambda: Path(TRIGGERS_DIR))
    packages_dir: Path = field(default_factory=lambda: Path(PACKAGES_DIR))
    command_timeout: float = 60.0

    @classmethod
    def load(cls, path: str | Path | None = None) -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            path: Config file path (default: ANNEAL_CONFIG or CONFIG_PATH)

        Returns:
            Config with defaults for any missing keys

        Raises:
            ConfigError: If the file exists but is unreadable or invalid
        """
        config_path = Path(path) if path is not None else get_config_path()

        if not config_path.exists():
            logger.warning(f"No config at {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"failed to read {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """
        Build a Config from a parsed YAML document.

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        config = cls()
        if data is None:
            return config
        if not isinstance(data, dict):
            raise ConfigError("config must be a mapping of key: value pairs")

        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                raise ConfigError("unknown key", key=str(key))
            setattr(config, key, _convert(key, value))

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to a YAML-friendly dictionary."""
        return {
            "version_threshold": self.version_threshold.as_str(),
            "triggers_dir": str(self.triggers_dir),
            "packages_dir": str(self.packages_dir),
            "command_timeout": self.command_timeout,
        }

    def to_yaml(self) -> str:
        """Serialize to the config file format."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)


def _convert(key: str, value: Any) -> Any:
    """Validate and convert a single config value."""
    if key == "version_threshold":
        if not isinstance(value, str):
            raise ConfigError("expected one of: major, minor, patch, always", key=key)
        try:
            return Threshold.from_str(value)
        except ValueError as e:
            raise ConfigError(str(e), key=key) from None

    if key in ("triggers_dir", "packages_dir"):
        if not isinstance(value, str) or not value:
            raise ConfigError("expected a directory path", key=key)
        return Path(value)

    # command_timeout
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError("expected a positive number of seconds", key=key)
    return float(value)
