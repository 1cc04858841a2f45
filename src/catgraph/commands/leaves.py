"""
catgraph.commands.leaves - List categories with no children.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import load_configuration, load_index, print_json
from catgraph.graph.loader import category_to_record
from catgraph.graph.queries import leaf_categories


def run(args: argparse.Namespace) -> int:
    """Run the leaves command."""
    config = load_configuration(args)
    index = load_index(args, config)

    leaves = leaf_categories(index, active_only=args.active_only)

    if args.json:
        print_json([category_to_record(c) for c in leaves])
        return 0
    for category in leaves:
        print(f"{category.id}\t{category.path}")
    return 0
