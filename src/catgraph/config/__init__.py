"""
catgraph.config - Configuration loading and defaults

Configuration lives in `.catgraph.toml`, found by walking up from the
working directory. File values are merged over DEFAULT_CONFIG and can be
overridden by CATGRAPH_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit

CONFIG_FILENAME = ".catgraph.toml"
ENV_PREFIX = "CATGRAPH_"

DEFAULT_CONFIG: dict[str, Any] = {
    "snapshot": {
        "file": "categories.json",
    },
    "hierarchy": {
        "max_level": 5,
    },
    "breadcrumbs": {
        "separator": " > ",
        "url_prefix": "/categories",
    },
    "tree": {
        "include_inactive": True,
    },
    "search": {
        "limit": 50,
    },
    "logging": {
        "level": "WARNING",
        "format": "text",
    },
}


class ConfigLoader:
    """Read-only view over a merged configuration dict with dotted access."""

    def __init__(self, data: dict[str, Any], path: Path | None = None) -> None:
        self._data = data
        self.path = path

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> ConfigLoader:
        return cls(data, path)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key, e.g. "hierarchy.max_level"."""
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_raw(self) -> dict[str, Any]:
        """Return a copy of the underlying dict."""
        return copy.deepcopy(self._data)

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML into plain Python dicts and lists."""
    return tomlkit.parse(content).unwrap()


def find_config_file(start: Path) -> Path | None:
    """Find .catgraph.toml in start or any parent directory."""
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Type an environment value: JSON list/object, boolean, int, else string."""
    stripped = value.strip()
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    if stripped.lower() in ("true", "false"):
        return stripped.lower() == "true"
    try:
        return int(stripped)
    except ValueError:
        return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply CATGRAPH_<SECTION>_<KEY> overrides.

    Section names never contain underscores, so the first underscore splits
    section from key: CATGRAPH_HIERARCHY_MAX_LEVEL -> hierarchy.max_level.
    """
    for env_key, raw in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        rest = env_key[len(ENV_PREFIX):].lower()
        section, _, key = rest.partition("_")
        if not key:
            continue
        config.setdefault(section, {})
        if isinstance(config[section], dict):
            config[section][key] = _try_parse_env_value(raw)
    return config


def load_config(path: Path | None = None, start: Path | None = None) -> ConfigLoader:
    """Load configuration.

    Args:
        path: Explicit config file. If None, search upward from start.
        start: Directory to search from (defaults to cwd).

    Returns:
        ConfigLoader with defaults, file values and env overrides merged.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    if path is None:
        path = find_config_file(start or Path.cwd())
    elif not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = copy.deepcopy(DEFAULT_CONFIG)
    if path is not None:
        data = merge_configs(data, parse_toml(path.read_text(encoding="utf-8")))
    data = _apply_env_overrides(data)
    return ConfigLoader(data, path)


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "ConfigLoader",
    "find_config_file",
    "load_config",
    "merge_configs",
    "parse_toml",
]
