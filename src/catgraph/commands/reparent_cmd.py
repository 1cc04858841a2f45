"""
catgraph.commands.reparent_cmd - Move a category under new parents.

Prints the cascade that the move produces. With --write the batch is
applied to the snapshot file; otherwise nothing is persisted.
"""

from __future__ import annotations

import argparse

from catgraph.commands.common import info, load_configuration, load_index, print_json, save_index
from catgraph.graph.cascade import reparent
from catgraph.graph.errors import CycleError
from catgraph.graph.serialize import serialize_batch


def run(args: argparse.Namespace) -> int:
    """Run the reparent command.

    Returns:
        0 on success, 1 if the move was rejected as a cycle.
    """
    config = load_configuration(args)
    index = load_index(args, config)

    try:
        batch = reparent(args.category_id, args.parent_ids, index)
    except CycleError as e:
        if args.json:
            print_json({"error": e.to_dict()})
        else:
            print(f"Rejected: {e.message}")
        return 1

    if args.json:
        print_json(serialize_batch(batch))
    else:
        print(f"Reparented {args.category_id}: {len(batch)} categories updated")
        for update in batch.iter_updates():
            changes = update.changes()
            if "level" in changes or "path" in changes:
                print(f"  {update.category_id}\tlevel={changes.get('level')}\t{changes.get('path')}")

    if args.write:
        path = save_index(batch.apply(index), args, config)
        info(args, f"Wrote {path}")
    return 0
