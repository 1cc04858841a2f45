"""
catgraph.commands.descendants - List every category below a category.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import load_configuration, load_index, print_json
from catgraph.graph.collector import iter_descendants
from catgraph.graph.errors import InvalidArgument


def run(args: argparse.Namespace) -> int:
    """Run the descendants command."""
    config = load_configuration(args)
    index = load_index(args, config)
    if args.category_id not in index:
        raise InvalidArgument(f"Category '{args.category_id}' not found in snapshot")

    ids = list(iter_descendants(args.category_id, index))

    if args.json:
        print_json({"categoryId": args.category_id, "descendants": ids})
        return 0
    for category_id in ids:
        category = index[category_id]
        print(f"{category.id}\t{category.level}\t{category.path}")
    return 0
