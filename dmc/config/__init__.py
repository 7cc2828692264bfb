"""Configuration management for dmc."""

from .loader import (
    API_KEY_ENV_VAR,
    apply_env_overrides,
    create_default_config,
    get_config_path,
    load_config,
    save_config,
    set_config_value,
)
from .models import DMCConfig, GitSettings, Interval, Template

__all__ = [
    "DMCConfig",
    "Interval",
    "Template",
    "GitSettings",
    "API_KEY_ENV_VAR",
    "load_config",
    "save_config",
    "apply_env_overrides",
    "set_config_value",
    "create_default_config",
    "get_config_path",
]
