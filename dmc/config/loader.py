"""Configuration loading and management."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from dmc.config.models import DMCConfig
from dmc.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "GEMINI_API_KEY"

SETTABLE_KEYS = ("author", "default_type", "api_key")


def load_config(config_path: Optional[Path] = None) -> DMCConfig:
    """Load the stored dmc configuration.

    If no file exists yet, a default configuration is created and written
    to disk. The environment override is not applied here; see
    :func:`apply_env_overrides`.

    Args:
        config_path: Explicit path to the config file (default: per-user path)

    Returns:
        Validated dmc configuration

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    path = config_path or get_config_path()

    if not path.exists():
        logger.debug("No configuration at %s, writing defaults", path)
        config = create_default_config()
        save_config(config, path)
        return config

    data = _load_json_file(path)

    try:
        return DMCConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def apply_env_overrides(config: DMCConfig) -> DMCConfig:
    """Return a copy of ``config`` with environment overrides applied.

    ``GEMINI_API_KEY`` replaces the stored API key for the current run only.
    The returned object should not be saved back.
    """
    api_key = os.getenv(API_KEY_ENV_VAR)
    if api_key:
        logger.debug("Using API key from %s", API_KEY_ENV_VAR)
        return config.model_copy(update={"api_key": api_key})
    return config


def save_config(config: DMCConfig, config_path: Optional[Path] = None) -> None:
    """Save configuration to a JSON file.

    Args:
        config: dmc configuration to save
        config_path: Path to save the configuration file (default: per-user path)

    Raises:
        ConfigurationError: If configuration cannot be saved
    """
    path = config_path or get_config_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(exclude_none=True, mode="json")

        with open(path, "w", encoding="utf-8") as f:
            json.dump(config_dict, f, indent=2, ensure_ascii=False)
            f.write("\n")

    except OSError as e:
        raise ConfigurationError(f"failed to save config to {path}: {e}") from e


def set_config_value(config: DMCConfig, key: str, value: str) -> DMCConfig:
    """Return a copy of ``config`` with one user-settable key changed.

    Args:
        config: Configuration as stored on disk
        key: One of ``author``, ``default_type`` or ``api_key``
        value: New value

    Returns:
        Updated configuration (the caller persists it)

    Raises:
        ConfigurationError: If the key is unknown or the template does not exist
    """
    if key not in SETTABLE_KEYS:
        raise ConfigurationError(f"unknown config key: {key}")

    if key == "default_type" and value not in config.templates:
        raise ConfigurationError(f"unknown template: {value}")

    return config.model_copy(update={key: value})


def create_default_config() -> DMCConfig:
    """Create a default dmc configuration.

    Returns:
        Configuration with the built-in intervals and templates
    """
    return DMCConfig()


def get_config_path() -> Path:
    """Get the per-user configuration file path."""
    # Try XDG config directory first
    xdg_config = os.getenv("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "dmc" / "config.json"

    # Fall back to ~/.config
    return Path.home() / ".config" / "dmc" / "config.json"


def _load_json_file(file_path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON data as dictionary

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"failed to parse config {file_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"failed to read config {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file must contain a JSON object, got {type(data).__name__}"
        )

    return data
