"""Descendant and ancestor traversal.

Every walk here is bounded by a visited set. The acyclicity invariant is
enforced on write, but a read may still see an externally corrupted
snapshot; a bounded walk turns that into a partial result instead of an
infinite loop.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator

import structlog

from catgraph.graph.index import GraphIndex

logger = structlog.get_logger(__name__)


def iter_descendants(category_id: str, index: GraphIndex) -> Iterator[str]:
    """BFS over the child adjacency view, yielding each descendant once.

    Args:
        category_id: Where to start. Not yielded itself.
        index: Snapshot index.

    Yields:
        Descendant ids in breadth-first order.
    """
    visited: set[str] = {category_id}
    queue: deque[str] = deque(index.children_of(category_id))
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        yield current
        queue.extend(c for c in index.children_of(current) if c not in visited)


def collect_descendants(category_id: str, index: GraphIndex) -> set[str]:
    """All categories reachable below category_id, each counted once.

    A descendant reachable through two different parent paths appears
    once. The category itself is excluded, even on a corrupt snapshot
    where it is reachable from its own children.
    """
    return set(iter_descendants(category_id, index))


def iter_ancestors(category_id: str, index: GraphIndex) -> Iterator[str]:
    """Iterate up through all ancestor paths (BFS), each ancestor once."""
    visited: set[str] = {category_id}
    queue: deque[str] = deque(index.parents_of(category_id))
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        yield current
        queue.extend(p for p in index.parents_of(current) if p not in visited)


def all_ancestor_paths(category_id: str, index: GraphIndex) -> list[list[str]]:
    """Every root-to-node path through every parent.

    Distinct from the canonical `path` field, which follows the primary
    parent only. A root yields a single one-element path. Dangling parents
    are skipped; if every parent of a category is dangling it is treated
    as the top of its path.

    Args:
        category_id: The category to explain.
        index: Snapshot index.

    Returns:
        List of id paths, each ending with category_id. Empty if the
        category is not in the snapshot.
    """
    if category_id not in index:
        return []

    paths: list[list[str]] = []
    # Each stack entry carries the partial path from the node up to the start.
    stack: list[list[str]] = [[category_id]]
    corrupt = False
    while stack:
        partial = stack.pop()
        head = partial[-1]
        parents = index.parents_of(head)
        if not parents:
            paths.append(list(reversed(partial)))
            continue
        extended = False
        for parent_id in reversed(parents):
            if parent_id in partial:
                corrupt = True
                continue
            stack.append(partial + [parent_id])
            extended = True
        if not extended:
            paths.append(list(reversed(partial)))

    if corrupt:
        logger.warning("ancestor_cycle_detected", category_id=category_id)
    return paths


def format_category_path(path: list[str], index: GraphIndex, separator: str = " > ") -> str:
    """Render an id path as names, e.g. "Electronics > Audio > Headphones".

    Unknown ids are rendered as the id itself.
    """
    names = []
    for category_id in path:
        category = index.get(category_id)
        names.append(category.name if category is not None and category.name else category_id)
    return separator.join(names)


def breadcrumbs(
    category_id: str,
    index: GraphIndex,
    url_prefix: str = "/categories",
) -> list[list[dict[str, Any]]]:
    """Breadcrumb trails for every ancestor path of a category.

    Args:
        category_id: The category being displayed.
        index: Snapshot index.
        url_prefix: Prepended to each category's canonical path.

    Returns:
        One list of breadcrumb items (id, name, slug, url) per ancestor
        path, canonical trail first when present.
    """
    trails = []
    for path in all_ancestor_paths(category_id, index):
        items = []
        for crumb_id in path:
            crumb = index[crumb_id]
            items.append(
                {
                    "id": crumb.id,
                    "name": crumb.name,
                    "slug": crumb.slug,
                    "url": f"{url_prefix}{crumb.path}",
                }
            )
        trails.append(items)

    # Canonical trail (primary parents all the way up) first
    def _is_canonical(trail: list[dict[str, Any]]) -> bool:
        return all(
            index[child["id"]].primary_parent_id == parent["id"]
            for parent, child in zip(trail, trail[1:])
        )

    trails.sort(key=lambda t: not _is_canonical(t))
    return trails


__all__ = [
    "all_ancestor_paths",
    "breadcrumbs",
    "collect_descendants",
    "format_category_path",
    "iter_ancestors",
    "iter_descendants",
]
