"""Configuration management — TOML config at ~/.config/termdeck/termdeck.toml."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import tomli_w

from termdeck.core.exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

_DEFAULT_CONFIG: dict[str, Any] = {
    "engine": {
        "name": "demo",
    },
    "display": {
        "prompt": "> ",
        "placeholder": "Type a command, e.g. help",
        "max_suggestions": 10,
        "show_welcome": True,
    },
    "logging": {
        "level": "WARNING",
        "file": "",
    },
    "history": {
        "enabled": True,
    },
}


def get_config_dir() -> Path:
    """Return the config directory, creating it if needed."""
    config_dir = Path(os.environ.get("TERMDECK_CONFIG_DIR", "~/.config/termdeck")).expanduser()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Return the path to the config TOML file."""
    return get_config_dir() / "termdeck.toml"


def get_history_path() -> Path:
    """Return the path to the REPL history file."""
    return get_config_dir() / "history"


def get_log_path(config: dict[str, Any] | None = None) -> Path:
    """Return the diagnostic log file, defaulting to the config directory."""
    if config is None:
        config = load_config()
    configured = config.get("logging", {}).get("file", "")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "termdeck.log"


def load_config() -> dict[str, Any]:
    """Load configuration from TOML file, returning defaults if not found."""
    config_path = get_config_path()
    if not config_path.exists():
        return _deep_copy_dict(_DEFAULT_CONFIG)
    try:
        with open(config_path, "rb") as f:
            user_config = tomllib.load(f)
        return _merge_config(_deep_copy_dict(_DEFAULT_CONFIG), user_config)
    except Exception as e:
        raise ConfigError(f"Failed to load config: {e}") from e


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to TOML file."""
    config_path = get_config_path()
    try:
        with open(config_path, "wb") as f:
            tomli_w.dump(config, f)
    except Exception as e:
        raise ConfigError(f"Failed to save config: {e}") from e


def update_config(**updates: Any) -> dict[str, Any]:
    """Load config, apply nested updates, save, and return the result.

    Usage: update_config(engine={"name": "demo"}, display={"max_suggestions": 5})
    """
    config = load_config()
    for section, values in updates.items():
        if section not in config:
            config[section] = {}
        if isinstance(values, dict):
            config[section].update(values)
        else:
            config[section] = values
    save_config(config)
    return config


def _merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_config(base[key], value)
        else:
            base[key] = value
    return base


def _deep_copy_dict(d: dict[str, Any]) -> dict[str, Any]:
    """Simple deep copy for nested dicts of simple types."""
    result: dict[str, Any] = {}
    for k, v in d.items():
        if isinstance(v, dict):
            result[k] = _deep_copy_dict(v)
        else:
            result[k] = v
    return result
