"""
catgraph.commands.common - Shared helpers for CLI commands.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from catgraph.config import ConfigLoader, load_config
from catgraph.graph.index import GraphIndex
from catgraph.graph.loader import dump_snapshot, load_snapshot


def load_configuration(args: argparse.Namespace) -> ConfigLoader:
    """Load config from --config, or search upward from the cwd."""
    return load_config(getattr(args, "config", None))


def snapshot_path(args: argparse.Namespace, config: ConfigLoader) -> Path:
    """Snapshot file from --snapshot, falling back to snapshot.file in config.

    A relative snapshot.file is resolved against the config file's directory.
    """
    explicit = getattr(args, "snapshot", None)
    if explicit is not None:
        return Path(explicit)
    configured = Path(config.get("snapshot.file", "categories.json"))
    if not configured.is_absolute() and config.path is not None:
        configured = config.path.parent / configured
    return configured


def load_index(args: argparse.Namespace, config: ConfigLoader) -> GraphIndex:
    """Load the snapshot named by the arguments or config.

    Raises:
        FileNotFoundError: If the snapshot file does not exist.
    """
    path = snapshot_path(args, config)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    return load_snapshot(path)


def save_index(index: GraphIndex, args: argparse.Namespace, config: ConfigLoader) -> Path:
    """Write an index back to the snapshot file."""
    path = snapshot_path(args, config)
    dump_snapshot(index.values(), path)
    return path


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def info(args: argparse.Namespace, message: str) -> None:
    """Print a status line unless --quiet was given."""
    if not getattr(args, "quiet", False):
        print(message, file=sys.stderr)
