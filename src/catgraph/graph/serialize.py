"""Serialization - export trees, snapshots and batches.

This module provides functions to serialize engine outputs to
JSON-compatible dicts, a markdown outline and CSV.
"""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

from catgraph.graph.tree import flatten_tree

if TYPE_CHECKING:
    from catgraph.graph.index import GraphIndex
    from catgraph.graph.mutations import BatchUpdate
    from catgraph.graph.tree import TreeNode


def serialize_trees(roots: list[TreeNode]) -> list[dict[str, Any]]:
    """Serialize a tree projection to nested dicts."""
    return [root.to_dict() for root in roots]


def serialize_index(index: GraphIndex) -> dict[str, Any]:
    """Serialize a snapshot index with summary metadata.

    Args:
        index: The index to serialize.

    Returns:
        Dict with categories, roots, dangling references and metadata.
    """
    from catgraph.graph.loader import category_to_record

    categories = [category_to_record(c) for c in index.values()]
    roots = [c.id for c in index.iter_roots()]
    return {
        "categories": categories,
        "roots": roots,
        "dangling": [
            {"categoryId": d.category_id, "parentId": d.parent_id} for d in index.dangling_references()
        ],
        "metadata": {
            "category_count": len(categories),
            "root_count": len(roots),
            "fingerprint": index.fingerprint(),
        },
    }


def serialize_batch(batch: BatchUpdate) -> dict[str, Any]:
    """Serialize a BatchUpdate as persistence payloads plus its id."""
    result = batch.to_records()
    result["id"] = batch.id
    result["timestamp"] = batch.timestamp.isoformat()
    return result


def to_markdown(roots: list[TreeNode]) -> str:
    """Render a tree projection as a nested markdown list.

    Args:
        roots: Root nodes from build_trees().

    Returns:
        Markdown string, one bullet per category.
    """
    lines = ["# Category Tree", ""]
    for depth, node in flatten_tree(roots):
        lines.append(f"{'  ' * depth}- **{node.name}** (`{node.path}`)")
    if not roots:
        lines.append("_No categories_")
    return "\n".join(lines) + "\n"


def to_csv(roots: list[TreeNode]) -> str:
    """Render a tree projection as CSV in display order."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["id", "name", "slug", "level", "depth", "path", "sort_order"])
    for depth, node in flatten_tree(roots):
        writer.writerow([node.id, node.name, node.slug, node.level, depth, node.path, node.sort_order])
    return output.getvalue()


__all__ = ["serialize_batch", "serialize_index", "serialize_trees", "to_csv", "to_markdown"]
