"""
catgraph.commands.search - Find categories by name or description.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import load_configuration, load_index, print_json
from catgraph.graph.loader import category_to_record
from catgraph.graph.queries import search_categories


def run(args: argparse.Namespace) -> int:
    """Run the search command. Exit code is 1 when nothing matches."""
    config = load_configuration(args)
    index = load_index(args, config)

    limit = args.limit if args.limit is not None else config.get("search.limit", 50)
    results = search_categories(index, args.query, limit=limit)

    if args.json:
        print_json([category_to_record(c) for c in results])
    else:
        for category in results:
            print(f"{category.id}\t{category.name}\t{category.path}")
    return 0 if results else 1
