"""
catgraph.commands.delete_cmd - Delete a category.

Refuses to delete a category that still has subcategories or products
unless --cascade (delete the whole subtree) or --force (detach the
children and keep them) is given.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import info, load_configuration, load_index, print_json, save_index
from catgraph.graph.cascade import delete_category, delete_impact
from catgraph.graph.serialize import serialize_batch


def run(args: argparse.Namespace) -> int:
    """Run the delete command."""
    config = load_configuration(args)
    index = load_index(args, config)

    impact = delete_impact(args.category_id, index)
    if args.dry_run:
        if args.json:
            print_json(
                {
                    "categoryId": impact.category_id,
                    "childIds": list(impact.child_ids),
                    "descendantIds": sorted(impact.descendant_ids),
                    "orphanedChildIds": list(impact.orphaned_child_ids),
                    "productCount": impact.product_count,
                    "safe": impact.is_safe,
                }
            )
        else:
            print(impact.summary())
        return 0

    if not impact.is_safe and not (args.cascade or args.force):
        print(f"Refusing to delete: {impact.summary()}")
        print("Use --cascade to delete the subtree or --force to detach children.")
        return 1

    batch = delete_category(args.category_id, index, cascade=args.cascade)

    if args.json:
        print_json(serialize_batch(batch))
    else:
        print(f"Deleted {len(batch.deleted)} categories: {', '.join(batch.deleted)}")
        if len(batch):
            print(f"Updated {len(batch)} remaining categories")

    if args.write:
        path = save_index(batch.apply(index), args, config)
        info(args, f"Wrote {path}")
    return 0
