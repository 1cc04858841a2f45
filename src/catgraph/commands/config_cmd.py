"""
catgraph.commands.config_cmd - Inspect configuration.

Subcommands:
- show: print the merged configuration
- get: print one value by dotted key
- path: print the config file location
"""

from __future__ import annotations

import argparse
import json
import sys

import tomlkit

from catgraph.commands.common import load_configuration


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)
    config = load_configuration(args)

    if action == "path":
        if config.path is None:
            print("No .catgraph.toml found (using defaults)", file=sys.stderr)
            return 1
        print(config.path)
        return 0

    if action == "get":
        sentinel = object()
        value = config.get(args.key, sentinel)
        if value is sentinel:
            print(f"Error: Key not found: {args.key}", file=sys.stderr)
            return 1
        if args.json or isinstance(value, (dict, list, bool)):
            print(json.dumps(value))
        else:
            print(value)
        return 0

    # show (default)
    data = config.get_raw()
    if getattr(args, "section", None):
        data = config.get(args.section)
        if not isinstance(data, dict):
            print(f"Error: Section not found: {args.section}", file=sys.stderr)
            return 1
    if getattr(args, "json", False):
        print(json.dumps(data, indent=2))
    else:
        print(tomlkit.dumps(data), end="")
    return 0
