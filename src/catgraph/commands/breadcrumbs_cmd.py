"""
catgraph.commands.breadcrumbs_cmd - Show breadcrumb trails for a category.

A category with several parents has one trail per ancestor path; the
trail following primary parents is printed first.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import load_configuration, load_index, print_json
from catgraph.graph.collector import breadcrumbs, format_category_path
from catgraph.graph.errors import InvalidArgument


def run(args: argparse.Namespace) -> int:
    """Run the breadcrumbs command."""
    config = load_configuration(args)
    index = load_index(args, config)
    if args.category_id not in index:
        raise InvalidArgument(f"Category '{args.category_id}' not found in snapshot")

    trails = breadcrumbs(
        args.category_id,
        index,
        url_prefix=config.get("breadcrumbs.url_prefix", "/categories"),
    )

    if args.json:
        print_json(trails)
        return 0

    separator = args.separator or config.get("breadcrumbs.separator", " > ")
    for trail in trails:
        print(format_category_path([item["id"] for item in trail], index, separator))
    return 0
