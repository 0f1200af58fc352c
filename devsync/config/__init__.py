"""Configuration management for devsync."""

from .loader import Config, default_config_path, load_config, save_config
from .models import ConfigModel

__all__ = [
    "Config",
    "ConfigModel",
    "default_config_path",
    "load_config",
    "save_config",
]
