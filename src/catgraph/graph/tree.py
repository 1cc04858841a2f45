"""Tree projection of the category DAG for display.

Each category is placed under exactly one tree parent, its primary
parent, so a category with several parents appears once. This is a
deliberately lossy view; use collector.all_ancestor_paths when the
multi-parent relationship itself must be shown.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import structlog

from catgraph.graph.category import Category

logger = structlog.get_logger(__name__)


@dataclass
class TreeNode:
    """A category placed in the display tree."""

    id: str
    name: str
    slug: str
    level: int = 0
    path: str = ""
    sort_order: int = 0
    children: list[TreeNode] = field(default_factory=list)

    @classmethod
    def from_category(cls, category: Category) -> TreeNode:
        return cls(
            id=category.id,
            name=category.name,
            slug=category.slug,
            level=category.level,
            path=category.path,
            sort_order=category.sort_order,
        )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[TreeNode]:
        """Pre-order traversal (parent before children)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Number of nodes in this subtree, including itself."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "level": self.level,
            "path": self.path,
            "sortOrder": self.sort_order,
            "children": [child.to_dict() for child in self.children],
        }


def _sort_key(node: TreeNode) -> tuple[int, str, str]:
    return (node.sort_order, node.name.lower(), node.id)


def build_trees(
    categories: Iterable[Category],
    include_inactive: bool = True,
    max_depth: int | None = None,
) -> list[TreeNode]:
    """Project categories into rooted trees sorted by sort_order.

    Categories with no parent, or whose primary parent is not in the
    given collection, become roots. Siblings are ordered by sort_order,
    then name, then id, at every level.

    Args:
        categories: The snapshot (a GraphIndex's values or any iterable).
        include_inactive: If False, inactive categories are left out
            together with everything placed below them.
        max_depth: If set, nodes more than this many levels below their
            root are left out (0 keeps roots only).

    Returns:
        Sorted list of root TreeNodes.
    """
    records: dict[str, Category] = {}
    for category in categories:
        records.setdefault(category.id, category)
    nodes = {cid: TreeNode.from_category(c) for cid, c in records.items()}

    children: dict[str, list[str]] = {}
    root_ids: list[str] = []
    for category in records.values():
        primary = category.primary_parent_id
        if primary is not None and primary in records and primary != category.id:
            children.setdefault(primary, []).append(category.id)
        else:
            root_ids.append(category.id)

    placed: set[str] = set()

    def _visible(category_id: str) -> bool:
        return include_inactive or records[category_id].is_active

    def _attach(root_id: str) -> TreeNode:
        root = nodes[root_id]
        placed.add(root_id)
        stack: list[tuple[TreeNode, int, bool]] = [(root, 0, _visible(root_id))]
        while stack:
            node, depth, shown = stack.pop()
            for child_id in children.get(node.id, ()):
                if child_id in placed:
                    continue
                placed.add(child_id)
                child = nodes[child_id]
                child_shown = shown and _visible(child_id)
                if child_shown and (max_depth is None or depth < max_depth):
                    node.children.append(child)
                stack.append((child, depth + 1, child_shown))
            node.children.sort(key=_sort_key)
        return root

    roots = [_attach(rid) for rid in root_ids]

    # Primary-parent loops are unreachable from any root; promote the
    # first member of each so nothing silently disappears.
    unplaced = [nodes[cid] for cid in nodes if cid not in placed]
    if unplaced:
        logger.warning(
            "tree_primary_parent_cycle",
            category_ids=sorted(n.id for n in unplaced),
        )
        for node in sorted(unplaced, key=_sort_key):
            if node.id not in placed:
                roots.append(_attach(node.id))

    visible_roots = [r for r in roots if _visible(r.id)]
    visible_roots.sort(key=_sort_key)
    return visible_roots


def flatten_tree(roots: list[TreeNode]) -> list[tuple[int, TreeNode]]:
    """Depth-annotated pre-order listing, for indented pickers."""
    result: list[tuple[int, TreeNode]] = []
    stack: list[tuple[int, TreeNode]] = [(0, r) for r in reversed(roots)]
    while stack:
        depth, node = stack.pop()
        result.append((depth, node))
        stack.extend((depth + 1, c) for c in reversed(node.children))
    return result


__all__ = ["TreeNode", "build_trees", "flatten_tree"]
