"""Configuration loading."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from fitlog.core.constants import (
    CONFIG_FILE_ENV,
    DATA_DIR_ENV,
    DATE_FORMAT,
    DEFAULT_CONFIG_FILE,
    DEFAULT_DATA_DIR,
    DEFAULT_LENGTH_IN_MINUTES,
    DEFAULT_SET_REPS,
    DEFAULT_SET_REST_IN_SECONDS,
    DEFAULT_SET_WEIGHT_IN_KG,
    DEFAULT_WORKOUT_NAME,
)


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Resolve XDG-style data directory with env override."""
    raw = os.getenv(DATA_DIR_ENV, DEFAULT_DATA_DIR)
    return expand_path(raw)


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "storage": {
            "data_dir": None,
        },
        "defaults": {
            "workout_name": DEFAULT_WORKOUT_NAME,
            "length_in_minutes": DEFAULT_LENGTH_IN_MINUTES,
            "set_weight_in_kg": DEFAULT_SET_WEIGHT_IN_KG,
            "set_reps": DEFAULT_SET_REPS,
            "set_rest_in_seconds": DEFAULT_SET_REST_IN_SECONDS,
        },
        "display": {
            "date_format": DATE_FORMAT,
        },
        "logging": {
            "level": "WARNING",
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))
    return cfg


def resolve_data_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve the private data directory: CLI flag, env, config, default."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv(DATA_DIR_ENV) or config.get("storage", {}).get("data_dir")
    if not raw:
        return expand_path(DEFAULT_DATA_DIR)
    return expand_path(str(raw))
