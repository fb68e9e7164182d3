"""Configuration management for Gale."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = "~/.gale"


@dataclass
class ConfigModel:
    """Global configuration model for Gale."""

    # Where tasks are persisted
    data_file: str = "~/.gale/tasks.txt"

    # Display preferences
    no_color: bool = False

    # "Did you mean ...?" hints for unknown commands
    suggest_commands: bool = True
    suggestion_cutoff: int = 70  # fuzzy ratio, 0-100

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        """Post-initialization setup."""
        self.data_file = os.path.expanduser(self.data_file)
        self.log_level = str(self.log_level).upper()

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_file": self.data_file,
            "no_color": self.no_color,
            "suggest_commands": self.suggest_commands,
            "suggestion_cutoff": self.suggestion_cutoff,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML. Unknown keys are ignored."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    def get_data_path(self) -> Path:
        return Path(self.data_file)

    @staticmethod
    def get_config_path() -> Path:
        """Get the default config file path."""
        return Path(os.path.expanduser(DEFAULT_CONFIG_DIR)) / "config.yaml"


class Config:
    """Configuration manager for Gale."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, or use defaults."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = ConfigModel.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    config = ConfigModel.from_yaml(f.read())
                logger.debug("Loaded configuration from %s", config_path)
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning("Failed to load config from %s: %s. Using defaults.",
                               config_path, e)
                config = ConfigModel()
        else:
            logger.debug("No config file at %s, using defaults", config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = ConfigModel.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
        logger.info("Configuration saved to %s", config_path)

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)
