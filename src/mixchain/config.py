"""YAML-based configuration for mixchain.

A single global file: $XDG_CONFIG_HOME/mixchain/config.yaml
(default ~/.config/mixchain/config.yaml).
"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "log_level": "WARNING",
    "recipes": [],
}


def get_config_dir() -> Path:
    """Get the mixchain config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "mixchain"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config() -> dict[str, Any]:
    """Load the config, filling in defaults for anything missing."""
    config_path = get_config_path()
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return copy.deepcopy(DEFAULT_CONFIG)
    except (yaml.YAMLError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(data, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)


def save_config(cfg: dict[str, Any]) -> None:
    """Save the config."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.dump(cfg, f, default_flow_style=False, sort_keys=False)


def get_recipe_paths(cfg: dict[str, Any] | None = None) -> list[Path]:
    """Get the configured recipe files, with ~ expanded."""
    if cfg is None:
        cfg = load_config()
    raw = cfg.get("recipes") or []
    if isinstance(raw, str):
        raw = [raw]
    return [Path(os.path.expanduser(str(p))) for p in raw]


def get_log_level(cfg: dict[str, Any] | None = None) -> int:
    """Get the logging level; debug mode forces DEBUG."""
    if cfg is None:
        cfg = load_config()
    if cfg.get("debug"):
        return logging.DEBUG
    level = logging.getLevelName(str(cfg.get("log_level", "WARNING")).upper())
    return level if isinstance(level, int) else logging.WARNING
