"""
catgraph.commands.tree - Print the category tree.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import load_configuration, load_index, print_json
from catgraph.graph.serialize import serialize_trees, to_csv, to_markdown
from catgraph.graph.tree import build_trees, flatten_tree


def run(args: argparse.Namespace) -> int:
    """Run the tree command."""
    config = load_configuration(args)
    index = load_index(args, config)

    include_inactive = config.get("tree.include_inactive", True)
    if args.active_only:
        include_inactive = False

    roots = build_trees(index.values(), include_inactive=include_inactive, max_depth=args.max_depth)

    fmt = "json" if args.json else args.format
    if fmt == "json":
        print_json(serialize_trees(roots))
    elif fmt == "markdown":
        print(to_markdown(roots), end="")
    elif fmt == "csv":
        print(to_csv(roots), end="")
    else:
        for depth, node in flatten_tree(roots):
            print(f"{'  ' * depth}{node.name} ({node.path})")
    return 0
