"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel

CONFIG_ENV = "DEVSYNC_CONFIG"
DEFAULT_CONFIG_NAME = "devsync.yaml"


def default_config_path() -> Path:
    """Config path from the environment, else ./devsync.yaml."""
    return Path(os.environ.get(CONFIG_ENV, DEFAULT_CONFIG_NAME))


class Config:
    """Configuration manager."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize config manager.

        Values in ``overrides`` that are not None win over the file. A missing
        file is tolerated here; the overrides must then form a valid config.
        """
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self.overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            data = read_config_data(self.config_path) if self.config_path.exists() else {}
            data.update(self.overrides)
            try:
                self._config = ConfigModel(**data)
            except ValidationError as e:
                raise ValueError(f"Invalid configuration: {e}")
        return self._config

    @property
    def output_path(self) -> Path:
        """Get the output directory, which must already exist."""
        path = Path(self.config.output_dir).expanduser()
        if not path.is_dir():
            raise FileNotFoundError(f"Output directory not found: {path}")
        return path


def read_config_data(config_path: Path) -> Dict[str, Any]:
    """Read the raw mapping from a YAML config file."""
    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return config_data


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        return ConfigModel(**read_config_data(config_path))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
